from __future__ import annotations

import logging
from typing import Callable

from ..attendance.scan_cache import RecentScanCache
from ..common.auth import ActorContext
from ..core.enums import Role
from ..core.exceptions import AuthorizationError

log = logging.getLogger(__name__)


class AdminService:
    """Bulk administrative operations (super admin only)."""

    def __init__(self, reset_data: Callable[[], dict], *, scan_cache: RecentScanCache):
        self._reset_data = reset_data
        self._scan_cache = scan_cache

    def reset(self, actor: ActorContext) -> dict:
        """Delete every attendance record and employee. Users are kept."""
        if actor.role != Role.SUPER_ADMIN:
            raise AuthorizationError("Se requiere rol de Super Administrador para esta acción")

        deleted = self._reset_data()
        self._scan_cache.clear()
        log.info("Data reset requested by %s: %s", actor.username, deleted)
        return deleted
