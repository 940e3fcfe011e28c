"""
User-facing notices emitted by the application state.

Store transitions never show anything themselves; ``AppState`` records a
``Notice`` after each operation and the presentation layer drains the log.
"""
from typing import List, Optional

from schemas import Notice, NoticeKind


class EventLog:
    def __init__(self) -> None:
        self._pending: List[Notice] = []

    def emit(self, kind: NoticeKind, title: str, detail: Optional[str] = None) -> Notice:
        notice = Notice(kind=kind, title=title, detail=detail)
        self._pending.append(notice)
        return notice

    def drain(self) -> List[Notice]:
        notices, self._pending = self._pending, []
        return notices

    def __len__(self) -> int:
        return len(self._pending)
