from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import SessionKind


@dataclass(frozen=True)
class Session:
    """Phiên đăng nhập, truyền tường minh vào các thao tác cần phân quyền."""

    kind: SessionKind
    worker_id: Optional[str] = None

    @classmethod
    def admin(cls) -> "Session":
        return cls(kind=SessionKind.ADMIN)

    @classmethod
    def for_worker(cls, worker_id: str) -> "Session":
        return cls(kind=SessionKind.WORKER, worker_id=worker_id)

    @property
    def is_admin(self) -> bool:
        return self.kind == SessionKind.ADMIN

    def can_act_for(self, worker_id: str) -> bool:
        return self.is_admin or self.worker_id == worker_id

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "worker_id": self.worker_id}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["Session"]:
        if not data or "kind" not in data:
            return None
        try:
            kind = SessionKind(data["kind"])
        except ValueError:
            return None
        return cls(kind=kind, worker_id=data.get("worker_id"))
