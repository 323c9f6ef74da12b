"""
Scout 커스텀 예외 클래스
- 표준화된 에러 핸들링
- 원격 엔진(Elasticsearch) 예외는 감싸지 않고 그대로 전파
"""


class ScoutError(Exception):
    """Scout 기본 예외"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class BuilderValidationError(ScoutError):
    """검색 빌더 필드 검증 실패"""

    def __init__(self, message: str, field: str = None, details: dict = None):
        super().__init__(message, details=details)
        self.field = field


class StructValidationError(ScoutError):
    """인덱스 구조(searchable_struct) 검증 실패"""

    def __init__(self, message: str, index: str = None, details: dict = None):
        super().__init__(message, details=details)
        self.index = index


class ModelResolutionError(ScoutError):
    """모델 클래스 경로 해석 실패"""

    def __init__(self, message: str, target: str = None, details: dict = None):
        super().__init__(message, details=details)
        self.target = target


class ConfigError(ScoutError):
    """설정 값 검증 실패"""

    def __init__(self, message: str, key: str = None, details: dict = None):
        super().__init__(message, details=details)
        self.key = key
