"""
Scout 설정

환경변수(.env 포함)에서 Elasticsearch 접속 정보와 인덱싱 기본값을 읽고,
기본 클라이언트/엔진 싱글톤을 제공합니다.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv
from elasticsearch import Elasticsearch

from scout.errors import ConfigError

load_dotenv()

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    """정수 환경변수 (형식 오류 시 ConfigError)"""
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}", key=name) from None


@dataclass
class ScoutConfig:
    """Scout 설정"""
    hosts: str = field(default_factory=lambda: os.getenv("SCOUT_ES_HOSTS", "http://localhost:9200"))
    index: Optional[str] = field(default_factory=lambda: os.getenv("SCOUT_ES_INDEX") or None)  # 7.0 미만 공유 인덱스
    prefix: str = field(default_factory=lambda: os.getenv("SCOUT_PREFIX", ""))
    chunk_size: int = field(default_factory=lambda: _env_int("SCOUT_CHUNK_SIZE", 500))
    timeout: int = field(default_factory=lambda: _env_int("SCOUT_ES_TIMEOUT", 30))
    number_of_shards: int = field(default_factory=lambda: _env_int("SCOUT_NUMBER_OF_SHARDS", 3))
    number_of_replicas: int = field(default_factory=lambda: _env_int("SCOUT_NUMBER_OF_REPLICAS", 2))

    @property
    def host_list(self) -> List[str]:
        """쉼표로 구분된 호스트 목록"""
        return [h.strip() for h in self.hosts.split(",") if h.strip()]


# 싱글톤 인스턴스
_config: Optional[ScoutConfig] = None
_es_client: Optional[Elasticsearch] = None
_engine = None


def get_config(force_new: bool = False) -> ScoutConfig:
    """설정 싱글톤 반환"""
    global _config
    if _config is None or force_new:
        _config = ScoutConfig()
    return _config


def get_es_client(config: Optional[ScoutConfig] = None, force_new: bool = False) -> Elasticsearch:
    """ES 클라이언트 싱글톤 반환 (lazy initialization)

    재시도/타임아웃은 클라이언트 설정으로만 다룹니다.
    """
    global _es_client
    if _es_client is None or force_new:
        config = config or get_config()
        _es_client = Elasticsearch(
            hosts=config.host_list,
            timeout=config.timeout,
            retry_on_timeout=True,
            max_retries=3,
        )
        logger.info(f"Elasticsearch client created: hosts={config.host_list}")
    return _es_client


def get_engine(force_new: bool = False):
    """기본 ElasticsearchEngine 싱글톤 반환

    서버 버전 감지는 엔진 생성 시 한 번만 수행되므로,
    이 경로를 통하면 프로세스당 한 번만 네트워크 왕복이 발생합니다.
    """
    global _engine
    if _engine is None or force_new:
        from scout.engines.es_engine import ElasticsearchEngine

        config = get_config()
        _engine = ElasticsearchEngine(
            get_es_client(config),
            index=config.index,
            number_of_shards=config.number_of_shards,
            number_of_replicas=config.number_of_replicas,
        )
    return _engine
