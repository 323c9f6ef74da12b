# Scout: 모델-검색 인덱스 동기화
"""
모델 ↔ Elasticsearch 인덱스 동기화 모듈

도메인 모델의 변경을 원격 검색 인덱스에 반영하고,
검색 빌더를 Elasticsearch 쿼리로 변환해 결과를 모델로 되돌립니다.

주요 컴포넌트:
- builder: 검색 요청 빌더
- searchable: 검색 가능 모델 계약 및 믹스인
- engines: 엔진 인터페이스와 Elasticsearch 드라이버
- events: 인덱싱 이벤트
- cli: 인덱스 구조 관리 명령
"""

from .builder import Builder
from .engines import Engine, ElasticsearchEngine, ServerCapability
from .events import ModelsImported
from .errors import ScoutError, ConfigError
from .searchable import BaseSearchableQuery, Searchable

__all__ = [
    "Builder",
    "Engine",
    "ElasticsearchEngine",
    "ServerCapability",
    "ModelsImported",
    "BaseSearchableQuery",
    "Searchable",
    "ScoutError",
    "ConfigError",
]
