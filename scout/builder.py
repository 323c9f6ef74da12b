"""
검색 빌더

검색어, 필터, 정렬, 결과 수 제한을 담는 요청 기술자(QuerySpec).
엔진에 넘겨진 뒤에는 변경하지 않는 것을 전제로 합니다.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from scout.errors import BuilderValidationError

SORT_DIRECTIONS = ("asc", "desc")


@dataclass
class Builder:
    """
    검색 요청 빌더

    사용 예:
        builder = User.search("alice").where("status", "active").order_by("age", "desc").take(10)
        users = builder.get()

    callback이 지정되면 엔진은 조립한 요청을 직접 실행하지 않고
    callback(client, query, params)의 반환값을 결과로 사용합니다.
    """
    model: Any
    query: str = ""
    callback: Optional[Callable[..., Any]] = None
    index: Optional[str] = None
    wheres: Dict[str, Any] = field(default_factory=dict)
    orders: List[Dict[str, str]] = field(default_factory=list)
    limit: Optional[int] = None

    def __post_init__(self):
        if self.model is None:
            raise BuilderValidationError("Builder requires a model", field="model")
        if self.query is None:
            self.query = ""
        if not isinstance(self.query, str):
            raise BuilderValidationError(
                f"query must be a string, got {type(self.query).__name__}", field="query"
            )
        if self.callback is not None and not callable(self.callback):
            raise BuilderValidationError("callback must be callable", field="callback")
        self._validate_limit(self.limit)

        for key in self.wheres:
            self._validate_field(key)

        orders = []
        for order in self.orders:
            orders.append(self._normalize_order(order.get("column"), order.get("direction", "asc")))
        self.orders = orders

    @staticmethod
    def _validate_field(name: Any) -> None:
        if not isinstance(name, str) or not name:
            raise BuilderValidationError(f"Invalid filter field: {name!r}", field="wheres")

    @staticmethod
    def _validate_limit(limit: Any) -> None:
        if limit is None:
            return
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise BuilderValidationError(f"limit must be a positive integer, got {limit!r}", field="limit")

    @staticmethod
    def _normalize_order(column: Any, direction: Any) -> Dict[str, str]:
        if not isinstance(column, str) or not column:
            raise BuilderValidationError(f"Invalid sort column: {column!r}", field="orders")
        direction = str(direction).lower()
        if direction not in SORT_DIRECTIONS:
            raise BuilderValidationError(
                f"Invalid sort direction: {direction}. Valid directions: {list(SORT_DIRECTIONS)}",
                field="orders",
            )
        return {"column": column, "direction": direction}

    def where(self, field_name: str, value: Any) -> "Builder":
        """정확 일치(match_phrase) 필터 추가"""
        self._validate_field(field_name)
        self.wheres[field_name] = value
        return self

    def where_in(self, field_name: str, values: List[Any]) -> "Builder":
        """값 목록 중 하나와 일치(terms) 필터 추가"""
        self._validate_field(field_name)
        self.wheres[field_name] = list(values)
        return self

    def order_by(self, column: str, direction: str = "asc") -> "Builder":
        self.orders.append(self._normalize_order(column, direction))
        return self

    def take(self, limit: int) -> "Builder":
        self._validate_limit(limit)
        self.limit = limit
        return self

    def within(self, index: str) -> "Builder":
        """모델 기본 인덱스 대신 사용할 인덱스 지정"""
        self.index = index
        return self

    def engine(self):
        return self.model.searchable_using()

    def raw(self):
        """엔진 원본 결과 반환"""
        return self.engine().search(self)

    def keys(self) -> List[Any]:
        return self.engine().keys(self)

    def get(self) -> List[Any]:
        return self.engine().get(self)

    def paginate(self, per_page: Optional[int] = None, page: int = 1) -> Dict[str, Any]:
        """
        페이지 단위 검색

        Args:
            per_page: 페이지 크기 (기본값: limit, 없으면 15)
            page: 1부터 시작하는 페이지 번호

        Returns:
            {"items": 모델 리스트, "total": 전체 건수, "per_page", "page", "pages"}
        """
        per_page = per_page or self.limit or 15
        engine = self.engine()
        raw = engine.paginate(self, per_page, page)

        return {
            "items": engine.map(self, raw, self.model),
            "total": engine.get_total_count(raw),
            "per_page": per_page,
            "page": page,
            "pages": raw.get("nbPages", 0),
        }
