from __future__ import annotations

import hmac
import logging

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError, AuthorizationError
from ..workers.repository import WorkerRepository
from .model import Session

logger = logging.getLogger(__name__)


def hash_pin(pin: str) -> str:
    return generate_password_hash(pin)


def require_admin(session: Session | None) -> Session:
    if session is None or not session.is_admin:
        raise AuthorizationError("Administrator session required")
    return session


def require_worker_access(session: Session | None, worker_id: str) -> Session:
    """Admins may act for anyone; workers only for themselves."""
    if session is None or not session.can_act_for(worker_id):
        raise AuthorizationError("Not allowed to act for this worker")
    return session


class AuthService:
    """Use case: turn a PIN into an explicit Session."""

    def __init__(self, workers: WorkerRepository, *, admin_pin: str):
        self._workers = workers
        self._admin_pin = str(admin_pin or "")

    def login_as_admin(self, pin: str) -> Session:
        if not self._admin_pin or not hmac.compare_digest(self._admin_pin.encode(), str(pin or "").encode()):
            logger.warning("Rejected administrator PIN")
            raise AuthenticationError("Wrong PIN")
        return Session.admin()

    def login_as_worker(self, worker_id: str, pin: str) -> Session:
        worker = self._workers.get_by_id(worker_id)
        if not worker:
            logger.warning("Login attempt for unknown worker %s", worker_id)
            raise AuthenticationError("Wrong PIN")

        try:
            ok = check_password_hash(worker.pin_hash, str(pin or ""))
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            logger.warning("Rejected PIN for worker %s", worker_id)
            raise AuthenticationError("Wrong PIN")
        return Session.for_worker(worker.worker_id)
