"""
검색 가능 모델 계약

도메인 계층(ORM 모델)이 엔진에 제공해야 하는 인터페이스와,
기본 구현을 채워주는 Searchable 믹스인을 정의합니다.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Sequence

from scout.builder import Builder
from scout.config import get_config, get_engine
from scout.events import ModelsImported, get_dispatcher

logger = logging.getLogger(__name__)


class SearchableQuery(Protocol):
    """도메인 계층 쿼리 (기본키 순 배치 순회)"""

    def order_by(self, column: str) -> "SearchableQuery": ...

    def chunk(self, size: int) -> Iterable[Sequence[Any]]: ...

    def searchable(self, chunk_size: Optional[int] = None) -> None: ...

    def unsearchable(self, chunk_size: Optional[int] = None) -> None: ...


class SearchableModel(Protocol):
    """엔진이 요구하는 모델 인터페이스"""

    def get_key(self) -> Any: ...

    def get_key_name(self) -> str: ...

    def get_scout_key(self) -> Any: ...

    def to_searchable_array(self) -> Dict[str, Any]: ...

    def searchable_as(self) -> str: ...

    def searchable_struct(self) -> Dict[str, Any]: ...

    def get_scout_models_by_ids(self, builder: Builder, ids: List[Any]) -> List[Any]: ...

    def new_collection(self) -> List[Any]: ...

    def new_query(self) -> SearchableQuery: ...

    def searchable_using(self) -> Any: ...


class BaseSearchableQuery:
    """
    SearchableQuery 기본 구현

    하위 클래스는 order_by()와 chunk()만 구현하면 되며,
    searchable()/unsearchable()은 배치마다 모델 엔진의 update/delete를 호출합니다.
    """

    def __init__(self, model: Any):
        self.model = model

    def order_by(self, column: str) -> "BaseSearchableQuery":
        raise NotImplementedError

    def chunk(self, size: int) -> Iterable[Sequence[Any]]:
        raise NotImplementedError

    def _each_chunk(self, chunk_size: Optional[int], handler: Callable[[Sequence[Any]], None]) -> int:
        size = chunk_size or get_config().chunk_size
        total = 0
        for models in self.chunk(size):
            if not models:
                continue
            handler(models)
            total += len(models)
        return total

    def searchable(self, chunk_size: Optional[int] = None) -> None:
        engine = self.model.searchable_using()
        total = self._each_chunk(chunk_size, engine.update)
        logger.info(f"Made {total} {type(self.model).__name__} record(s) searchable")

    def unsearchable(self, chunk_size: Optional[int] = None) -> None:
        engine = self.model.searchable_using()
        total = self._each_chunk(chunk_size, engine.delete)
        logger.info(f"Removed {total} {type(self.model).__name__} record(s) from search")


class Searchable:
    """
    검색 가능 모델 믹스인

    모델 클래스는 get_key(), get_key_name(), to_searchable_array(),
    get_scout_models_by_ids(), new_query()를 제공해야 합니다.

    사용 예:
        class User(Searchable, Model):
            searchable_index = "users"

        User.search("alice").where("status", "active").get()
    """

    # 인덱스명 (없으면 소문자 클래스명)
    searchable_index: Optional[str] = None

    def searchable_as(self) -> str:
        name = self.searchable_index or type(self).__name__.lower()
        return f"{get_config().prefix}{name}"

    def searchable_struct(self) -> Dict[str, Any]:
        return {}

    def get_scout_key(self) -> Any:
        return self.get_key()

    def new_collection(self) -> List[Any]:
        return []

    def searchable_using(self):
        return get_engine()

    @classmethod
    def search(cls, query: str = "", callback: Optional[Callable[..., Any]] = None) -> Builder:
        return Builder(model=cls(), query=query, callback=callback)

    def searchable(self) -> None:
        """현재 모델 인덱싱"""
        self.searchable_using().update([self])

    def unsearchable(self) -> None:
        """현재 모델을 인덱스에서 제거"""
        self.searchable_using().delete([self])

    @classmethod
    def make_all_searchable(cls, chunk_size: Optional[int] = None) -> int:
        """
        전체 레코드 일괄 인덱싱

        기본키 순으로 배치를 읽어 update하고, 배치마다 ModelsImported를 발행합니다.

        Returns:
            인덱싱된 레코드 수
        """
        model = cls()
        engine = model.searchable_using()
        dispatcher = get_dispatcher()
        size = chunk_size or get_config().chunk_size

        total = 0
        for models in model.new_query().order_by(model.get_key_name()).chunk(size):
            if not models:
                continue
            engine.update(models)
            dispatcher.dispatch(ModelsImported(models))
            total += len(models)

        logger.info(f"Imported {total} {cls.__name__} record(s)")
        return total

    @classmethod
    def remove_all_from_search(cls) -> None:
        model = cls()
        model.searchable_using().flush(model)

    def searchable_create_struct(self) -> None:
        self.searchable_using().create_struct(self)

    def searchable_drop_struct(self) -> None:
        self.searchable_using().drop_struct(self)

    def searchable_regen_struct(self) -> None:
        self.searchable_using().regen_struct(self)
