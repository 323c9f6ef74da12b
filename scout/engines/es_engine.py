"""
Elasticsearch 엔진 드라이버

모델 배치를 bulk 요청으로 인덱스에 반영하고, 검색 빌더를 bool 쿼리로 변환하며,
모델별 인덱스 구조(생성/삭제/재생성)를 관리합니다.

서버 버전이 7.0.0 미만이면 legacy 방식으로 동작합니다:
    - 모든 문서는 고정 인덱스(index)에 저장
    - 모델의 searchable_as() 값은 인덱스 내부 type으로 사용
7.0.0 이상이면 modern 방식으로 searchable_as() 값이 곧 인덱스명입니다.
"""

import math
import logging
from typing import Any, Dict, List, Mapping, Optional

from scout.builder import Builder
from scout.engines.engine import Engine
from scout.engines.capability import ServerCapability
from scout.errors import StructValidationError

logger = logging.getLogger(__name__)

DEFAULT_NUMBER_OF_SHARDS = 3
DEFAULT_NUMBER_OF_REPLICAS = 2


class ElasticsearchEngine(Engine):
    """
    Elasticsearch 검색 엔진

    사용 예:
        engine = ElasticsearchEngine(Elasticsearch("http://localhost:9200"))
        engine.update(users)
        users = engine.get(User.search("alice").take(10))
    """

    def __init__(
        self,
        client: Any,
        index: Optional[str] = None,
        capability: Optional[ServerCapability] = None,
        number_of_shards: int = DEFAULT_NUMBER_OF_SHARDS,
        number_of_replicas: int = DEFAULT_NUMBER_OF_REPLICAS,
    ):
        """
        엔진 초기화

        Args:
            client: Elasticsearch 클라이언트
            index: legacy 방식에서 사용할 공유 인덱스명
            capability: 서버 기능 (없고 index가 주어지면 생성 시 한 번 감지)
            number_of_shards: 인덱스 생성 기본 샤드 수
            number_of_replicas: 인덱스 생성 기본 레플리카 수
        """
        self.client = client
        self.number_of_shards = number_of_shards
        self.number_of_replicas = number_of_replicas

        if index and capability is None:
            capability = ServerCapability.detect(client)
        self.capability = capability

        # 7.0.0 이상은 type을 지원하지 않으므로 공유 인덱스를 쓰지 않음
        self.index = index if index and capability is not None and capability.legacy else None

    @property
    def legacy(self) -> bool:
        return self.index is not None

    def _document_address(self, model: Any) -> Dict[str, Any]:
        """bulk action의 문서 주소 (_id, _index[, _type])"""
        if self.legacy:
            return {
                "_id": model.get_key(),
                "_index": self.index,
                "_type": model.searchable_as(),
            }
        return {
            "_id": model.get_key(),
            "_index": model.searchable_as(),
        }

    def _bulk(self, body: List[Dict[str, Any]], action: str, count: int) -> None:
        response = self._response_body(self.client.bulk(body=body))
        logger.info(f"ES bulk {action}: {count} docs")

        if isinstance(response, Mapping) and response.get("errors"):
            failed = [
                item for item in response.get("items", [])
                if any("error" in result for result in item.values())
            ]
            logger.warning(f"ES bulk {action}: {len(failed)}/{count} items failed")

    def update(self, models: List[Any]) -> None:
        """모델 배치를 doc_as_upsert로 반영 (문서가 없으면 생성)"""
        models = list(models)
        if not models:
            logger.debug("ES bulk update skipped: empty batch")
            return

        body = []
        for model in models:
            body.append({"update": self._document_address(model)})
            body.append({
                "doc": model.to_searchable_array(),
                "doc_as_upsert": True,
            })

        self._bulk(body, "update", len(models))

    def delete(self, models: List[Any]) -> None:
        models = list(models)
        if not models:
            logger.debug("ES bulk delete skipped: empty batch")
            return

        body = [{"delete": self._document_address(model)} for model in models]
        self._bulk(body, "delete", len(models))

    def search(self, builder: Builder) -> Any:
        options = {"filters": self._filters(builder)}
        if builder.limit:
            options["size"] = builder.limit
        return self._perform_search(builder, options)

    def paginate(self, builder: Builder, per_page: int, page: int) -> Any:
        """
        페이지 단위 검색

        nbPages는 ceil(total / per_page) 정수로 첨부합니다.
        (마지막 페이지가 일부만 채워져도 한 페이지로 셈)
        """
        if per_page <= 0:
            raise ValueError(f"per_page must be positive, got {per_page}")
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")

        result = self._perform_search(builder, {
            "filters": self._filters(builder),
            "from": (page - 1) * per_page,
            "size": per_page,
        })
        result["nbPages"] = math.ceil(self.get_total_count(result) / per_page)
        return result

    def _build_params(self, builder: Builder, options: Dict[str, Any]) -> Dict[str, Any]:
        """검색 요청 파라미터 조립 (index[, doc_type], body)"""
        body: Dict[str, Any] = {
            "query": {
                "bool": {
                    "must": [{"query_string": {"query": f"*{builder.query}*"}}],
                }
            }
        }

        target = builder.index or builder.model.searchable_as()
        # 7.x 클라이언트의 doc_type 인자 사용 (8.x 이상 클라이언트에는 없음)
        if self.legacy:
            params = {"index": self.index, "doc_type": target, "body": body}
        else:
            params = {"index": target, "body": body}

        sort = self._sort(builder)
        if sort:
            body["sort"] = sort
        if options.get("from") is not None:
            body["from"] = options["from"]
        if options.get("size") is not None:
            body["size"] = options["size"]
        if options.get("filters"):
            body["query"]["bool"]["must"].extend(options["filters"])

        return params

    def _perform_search(self, builder: Builder, options: Dict[str, Any]) -> Any:
        params = self._build_params(builder, options)

        if builder.callback:
            return builder.callback(self.client, builder.query, params)

        response = self.client.search(**params)
        logger.info(f"ES search: query='{builder.query}', index={params['index']}")
        return self._response_body(response)

    @staticmethod
    def _response_body(response: Any) -> Any:
        """클라이언트 응답 객체를 수정 가능한 dict로 변환"""
        if isinstance(response, dict):
            return response
        body = getattr(response, "body", None)
        if isinstance(body, dict):
            return body
        return response

    def _sort(self, builder: Builder) -> Optional[List[Dict[str, str]]]:
        if not builder.orders:
            return None
        return [{order["column"]: order["direction"]} for order in builder.orders]

    def _filters(self, builder: Builder) -> List[Dict[str, Any]]:
        """
        필터 절 변환

        리스트 값은 terms(값 목록 중 하나), 스칼라 값은 match_phrase(정확 구문)로 변환합니다.
        """
        clauses = []
        for field, value in builder.wheres.items():
            if isinstance(value, (list, tuple, set)):
                clauses.append({"terms": {field: list(value)}})
            else:
                clauses.append({"match_phrase": {field: value}})
        return clauses

    def get_total_count(self, results: Any) -> int:
        # 7.0 미만: 정수, 7.0 이상: {"value": N, "relation": "eq"}
        total = results["hits"]["total"]
        if isinstance(total, Mapping):
            return int(total["value"])
        return int(total)

    def map_ids(self, results: Any) -> List[Any]:
        return [hit["_id"] for hit in results["hits"]["hits"]]

    def map(self, builder: Builder, results: Any, model: Any) -> List[Any]:
        """
        검색 결과를 모델 인스턴스로 변환

        도메인 계층이 돌려준 모델 중 검색 결과 키에 있는 것만 남기고 검색 결과 순서로 정렬합니다.
        _id는 문자열이므로 키 비교는 문자열 기준입니다.
        """
        if self.get_total_count(results) == 0:
            return model.new_collection()

        keys = self.map_ids(results)
        positions: Dict[str, int] = {}
        for position, key in enumerate(keys):
            positions.setdefault(str(key), position)

        models = model.get_scout_models_by_ids(builder, keys)
        matched = [m for m in models if str(m.get_scout_key()) in positions]
        matched.sort(key=lambda m: positions[str(m.get_scout_key())])

        collection = model.new_collection()
        collection.extend(matched)
        return collection

    def flush(self, model: Any) -> None:
        """기본키 순으로 도메인 쿼리를 순회하며 전체 레코드를 검색 대상에서 제거"""
        model.new_query().order_by(model.get_key_name()).unsearchable()

    def regen_struct(self, model: Any) -> None:
        index = model.searchable_as()
        if self.client.indices.exists(index=index):
            self.drop_struct(model)
        self.create_struct(model)

    def drop_struct(self, model: Any) -> None:
        index = model.searchable_as()
        self.client.indices.delete(index=index)
        logger.info(f"Index deleted: {index}")

    def _default_settings(self) -> Dict[str, int]:
        return {
            "number_of_shards": self.number_of_shards,
            "number_of_replicas": self.number_of_replicas,
        }

    def _build_struct_body(self, model: Any) -> Dict[str, Any]:
        """
        인덱스 생성 body 조립

        - 구조가 비어 있으면: 원문 저장(_source)만 켜고 필드 매핑 없음
        - properties 키가 있으면: 구조 전체를 mappings로 사용
        - 그 외: 구조 전체를 body로 사용 (settings 포함 가정, 기본 샤드 설정 미적용)
        """
        index = model.searchable_as()
        struct = model.searchable_struct()

        if struct is None:
            struct = {}
        if not isinstance(struct, Mapping):
            raise StructValidationError(
                f"searchable_struct() must return a mapping, got {type(struct).__name__}",
                index=index,
            )

        if not struct:
            return {
                "settings": self._default_settings(),
                "mappings": {"_source": {"enabled": True}},
            }

        if "properties" in struct:
            if not isinstance(struct["properties"], Mapping):
                raise StructValidationError(
                    f"'properties' must be a mapping, got {type(struct['properties']).__name__}",
                    index=index,
                )
            return {
                "settings": self._default_settings(),
                "mappings": dict(struct),
            }

        return dict(struct)

    def create_struct(self, model: Any) -> None:
        index = model.searchable_as()
        body = self._build_struct_body(model)

        self.client.indices.create(index=index, body=body)
        logger.info(f"Index created: {index}")
