"""
검색 엔진 드라이버 인터페이스

백엔드별 드라이버가 구현해야 하는 연산(배치 반영/검색/결과 매핑/인덱스 구조 관리)을 정의합니다.
"""

from abc import ABC, abstractmethod
from typing import Any, List

from scout.builder import Builder


class Engine(ABC):
    """검색 엔진 드라이버 기본 클래스"""

    @abstractmethod
    def update(self, models: List[Any]) -> None:
        """모델 배치 upsert (빈 배치는 무시)"""

    @abstractmethod
    def delete(self, models: List[Any]) -> None:
        """모델 배치를 기본키로 인덱스에서 제거"""

    @abstractmethod
    def search(self, builder: Builder) -> Any:
        """페이지 없이 검색, 백엔드 원본 결과 반환"""

    @abstractmethod
    def paginate(self, builder: Builder, per_page: int, page: int) -> Any:
        """
        offset 기반 페이지 검색

        Args:
            builder: 검색 빌더
            per_page: 페이지 크기
            page: 1부터 시작하는 페이지 번호

        Returns:
            백엔드 원본 결과 (페이지 수 nbPages 포함)
        """

    @abstractmethod
    def get_total_count(self, results: Any) -> int:
        ...

    @abstractmethod
    def map_ids(self, results: Any) -> List[Any]:
        """검색 결과 순서대로 기본키 목록 반환"""

    @abstractmethod
    def map(self, builder: Builder, results: Any, model: Any) -> List[Any]:
        """검색 결과를 모델 인스턴스로 변환 (총 건수 0이면 도메인 조회 없음)"""

    @abstractmethod
    def flush(self, model: Any) -> None:
        ...

    @abstractmethod
    def create_struct(self, model: Any) -> None:
        ...

    @abstractmethod
    def drop_struct(self, model: Any) -> None:
        ...

    @abstractmethod
    def regen_struct(self, model: Any) -> None:
        """있으면 삭제 후 생성"""

    def keys(self, builder: Builder) -> List[Any]:
        return self.map_ids(self.search(builder))

    def get(self, builder: Builder) -> List[Any]:
        return self.map(builder, self.search(builder), builder.model)
