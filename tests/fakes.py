"""
테스트용 인메모리 도메인 모델
- DB 없이 Searchable 계약 구현
"""

from typing import Any, Dict, List

from scout.searchable import BaseSearchableQuery, Searchable


class FakeQuery(BaseSearchableQuery):
    """기본키 순 배치 순회 쿼리"""

    def __init__(self, model):
        super().__init__(model)
        self.ordered_by = None

    def order_by(self, column: str) -> "FakeQuery":
        self.ordered_by = column
        type(self.model).queries.append(self)
        return self

    def chunk(self, size: int):
        rows = [type(self.model).registry[k] for k in sorted(type(self.model).registry)]
        for start in range(0, len(rows), size):
            yield rows[start:start + size]


class FakeUser(Searchable):
    """검색 가능 사용자 모델"""

    searchable_index = "users"

    registry: Dict[int, "FakeUser"] = {}
    stale: List["FakeUser"] = []
    hydrate_calls: List[List[Any]] = []
    queries: List[FakeQuery] = []
    engine = None
    struct: Any = {}

    def __init__(self, id: int = None, name: str = "", status: str = "active", age: int = 0):
        self.id = id
        self.name = name
        self.status = status
        self.age = age

    def __repr__(self):
        return f"FakeUser(id={self.id})"

    @classmethod
    def reset(cls, engine=None):
        cls.registry = {}
        cls.stale = []
        cls.hydrate_calls = []
        cls.queries = []
        cls.engine = engine
        cls.struct = {}

    @classmethod
    def create(cls, id: int, **attrs) -> "FakeUser":
        user = cls(id=id, **attrs)
        cls.registry[id] = user
        return user

    def get_key(self):
        return self.id

    def get_key_name(self) -> str:
        return "id"

    def to_searchable_array(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "status": self.status, "age": self.age}

    def searchable_struct(self):
        return type(self).struct

    def get_scout_models_by_ids(self, builder, ids):
        type(self).hydrate_calls.append(list(ids))
        wanted = {str(i) for i in ids}
        found = [m for k, m in sorted(type(self).registry.items()) if str(k) in wanted]
        return found + list(type(self).stale)

    def new_query(self) -> FakeQuery:
        return FakeQuery(self)

    def searchable_using(self):
        return type(self).engine
