"""
Scout 이벤트

일괄 인덱싱 등 모델-인덱스 동기화 시점을 리스너에게 알립니다.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Type

logger = logging.getLogger(__name__)


@dataclass
class ModelsImported:
    """모델 묶음이 인덱스에 반영됨"""
    models: Sequence[Any]


class EventDispatcher:
    """동기 이벤트 디스패처 (리스너 예외는 호출자에게 전파)"""

    def __init__(self):
        self._listeners: Dict[Type, List[Callable[[Any], None]]] = defaultdict(list)

    def listen(self, event_type: Type, listener: Callable[[Any], None]) -> None:
        self._listeners[event_type].append(listener)

    def forget(self, event_type: Type, listener: Optional[Callable[[Any], None]] = None) -> None:
        """리스너 제거 (listener가 없으면 해당 이벤트의 전체 리스너)"""
        if listener is None:
            self._listeners.pop(event_type, None)
            return
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def has_listeners(self, event_type: Type) -> bool:
        return bool(self._listeners.get(event_type))

    def dispatch(self, event: Any) -> None:
        listeners = self._listeners.get(type(event), [])
        logger.debug(f"Dispatching {type(event).__name__} to {len(listeners)} listener(s)")
        for listener in list(listeners):
            listener(event)


# 싱글톤 인스턴스
_dispatcher: Optional[EventDispatcher] = None


def get_dispatcher() -> EventDispatcher:
    """이벤트 디스패처 싱글톤 반환"""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = EventDispatcher()
    return _dispatcher
