from __future__ import annotations

from dataclasses import dataclass
from functools import wraps

from flask import g, session

from ..core.enums import Role
from .http import fail


@dataclass(frozen=True)
class ActorContext:
    """Verified caller identity, read from the signed session cookie."""

    user_id: int
    username: str
    role: Role


def current_actor() -> ActorContext:
    return g.actor


def _load_actor() -> ActorContext | None:
    if "user_id" not in session:
        return None
    try:
        return ActorContext(
            user_id=int(session["user_id"]),
            username=str(session.get("username", "")),
            role=Role(session.get("role")),
        )
    except ValueError:
        # Stale cookie from a role that no longer exists.
        session.clear()
        return None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        actor = _load_actor()
        if actor is None:
            return fail("Se requiere iniciar sesión", status=401)
        g.actor = actor
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = set(roles)

    def outer(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            actor = _load_actor()
            if actor is None:
                return fail("Se requiere iniciar sesión", status=401)
            if actor.role not in allowed:
                return fail("Permisos insuficientes para esta acción", status=403)
            g.actor = actor
            return view(*args, **kwargs)

        return wrapper

    return outer


CAN_SCAN = (Role.SUPER_ADMIN, Role.SCANNER)
ADMIN_ONLY = (Role.SUPER_ADMIN,)
