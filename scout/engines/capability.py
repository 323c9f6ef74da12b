"""
Elasticsearch 서버 기능 감지

서버 버전에 따라 인덱싱 방식(legacy: 공유 인덱스 + type, modern: 모델별 인덱스)을 결정합니다.
"""

import re
import logging
from dataclasses import dataclass
from typing import Any, Tuple

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "0.0.0"
LEGACY_VERSION_BOUNDARY = (7, 0, 0)

_VERSION_PATTERN = re.compile(r"^\s*(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def parse_version(version: str) -> Tuple[int, int, int]:
    """'7.10.2-SNAPSHOT' → (7, 10, 2). 해석 불가 시 (0, 0, 0)"""
    match = _VERSION_PATTERN.match(str(version or ""))
    if not match:
        return (0, 0, 0)
    return tuple(int(part or 0) for part in match.groups())


@dataclass(frozen=True)
class ServerCapability:
    """감지된 서버 버전과 그에 따른 인덱싱 방식"""
    version: str = DEFAULT_VERSION

    @property
    def version_tuple(self) -> Tuple[int, int, int]:
        return parse_version(self.version)

    @property
    def legacy(self) -> bool:
        """7.0.0 미만이면 type 기반 legacy 방식"""
        return self.version_tuple < LEGACY_VERSION_BOUNDARY

    @classmethod
    def detect(cls, client: Any) -> "ServerCapability":
        """
        서버 버전 조회

        조회 실패는 전파하지 않고 가장 오래된 버전(0.0.0)으로 간주합니다.
        여러 번 호출되어도 결과만 같으면 되므로 동기화하지 않습니다.
        """
        try:
            version = client.info()["version"]["number"]
        except Exception as e:
            logger.warning(f"Elasticsearch version detection failed, assuming {DEFAULT_VERSION}: {e}")
            return cls(DEFAULT_VERSION)

        logger.info(f"Elasticsearch version detected: {version}")
        return cls(str(version))
