from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

from .model import Worker


class WorkerRepository(Protocol):
    """Giao diện repository cho Worker.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp kho lưu trữ cụ thể.
    """

    def list_all(self) -> Sequence[Worker]:
        raise NotImplementedError

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        raise NotImplementedError

    def save(self, worker: Worker) -> None:
        """Insert or replace the worker profile."""

        raise NotImplementedError

    def delete_by_id(self, worker_id: str) -> bool:
        raise NotImplementedError


class WorkerChangeFeed(Protocol):
    """Optional live subscription for stores shared by several clients."""

    def on_workers_changed(self, callback: Callable[[Sequence[Worker]], None]) -> Callable[[], None]:
        """Register ``callback``; the returned callable unsubscribes it."""

        raise NotImplementedError
