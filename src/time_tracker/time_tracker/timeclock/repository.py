from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

from .model import WorkerState


class WorkerStateRepository(Protocol):
    def get_for_worker(self, worker_id: str) -> Optional[WorkerState]:
        raise NotImplementedError

    def save(self, worker_id: str, state: WorkerState) -> None:
        """Persist ``state``.

        Stores that track revisions compare ``state.revision`` with the stored
        one, raise StaleStateError on mismatch and bump the revision on success.
        """

        raise NotImplementedError

    def delete_for_worker(self, worker_id: str) -> bool:
        raise NotImplementedError

    def list_worker_ids(self) -> Sequence[str]:
        raise NotImplementedError


class WorkerStateChangeFeed(Protocol):
    def on_worker_state_changed(
        self, worker_id: str, callback: Callable[[Optional[WorkerState]], None]
    ) -> Callable[[], None]:
        raise NotImplementedError
