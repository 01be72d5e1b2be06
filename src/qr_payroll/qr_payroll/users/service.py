from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.auth import ActorContext
from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

log = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def parse_role(value: Any) -> Role:
    try:
        return Role(str(value or "").strip())
    except ValueError:
        raise ValidationError("Rol inválido")


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    username: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        if not username or not password:
            raise ValidationError("Usuario y contraseña son requeridos")

        user = self._users.get_by_username(username.strip())
        if not user or not user.is_active:
            raise AuthenticationError("Credenciales inválidas")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Credenciales inválidas")

        return SessionUser(user_id=user.user_id, username=user.username, role=user.role)

    def update_profile(
        self,
        actor: ActorContext,
        *,
        username: str,
        current_password: Optional[str] = None,
        new_password: Optional[str] = None,
    ) -> User:
        username = require_non_empty(username, "Usuario")
        user = self._users.get_by_id(actor.user_id)
        if not user or not user.is_active:
            raise NotFoundError("Usuario no encontrado")

        password_hash = None
        if new_password:
            if not current_password or not check_password_hash(user.password_hash, current_password):
                raise AuthenticationError("La contraseña actual es incorrecta")
            require_min_length(new_password, "Contraseña", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(new_password)

        if username != user.username:
            existing = self._users.get_by_username(username)
            if existing and existing.user_id != user.user_id:
                raise ValidationError("El nombre de usuario ya existe")

        self._users.update_user(user.user_id, username=username, password_hash=password_hash)
        return self._users.get_by_id(user.user_id)


class UserService:
    """Use case: manage users (super admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def _require_admin(actor: ActorContext) -> None:
        if actor.role != Role.SUPER_ADMIN:
            raise AuthorizationError("Se requiere rol de Super Administrador para esta acción")

    def list_active(self, actor: ActorContext) -> Sequence[User]:
        self._require_admin(actor)
        return self._users.list_active()

    def get(self, actor: ActorContext, user_id: int) -> User:
        self._require_admin(actor)
        user = self._users.get_by_id(int(user_id))
        if not user or not user.is_active:
            raise NotFoundError("Usuario no encontrado")
        return user

    def create_account(self, actor: ActorContext, *, username: str, password: str, role: Any) -> User:
        self._require_admin(actor)
        username = require_non_empty(username, "Usuario")
        require_min_length(password, "Contraseña", MIN_PASSWORD_LENGTH)
        role = parse_role(role)

        if self._users.get_by_username(username):
            raise ValidationError("El nombre de usuario ya existe")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
        )
        log.info("User %r (%s) created by %s", username, role.value, actor.username)
        return self._users.get_by_id(user_id)

    def update_account(
        self,
        actor: ActorContext,
        user_id: int,
        *,
        role: Any = None,
        password: Optional[str] = None,
    ) -> User:
        user = self.get(actor, user_id)

        new_role = parse_role(role) if role else None
        if new_role and new_role != Role.SUPER_ADMIN and user.role == Role.SUPER_ADMIN:
            self._ensure_not_last_admin(user)

        password_hash = None
        if password:
            require_min_length(password, "Contraseña", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        self._users.update_user(user.user_id, password_hash=password_hash, role=new_role)
        return self._users.get_by_id(user.user_id)

    def deactivate(self, actor: ActorContext, user_id: int) -> None:
        user = self.get(actor, user_id)
        if user.user_id == actor.user_id:
            raise ValidationError("No puede desactivar su propia cuenta")
        if user.role == Role.SUPER_ADMIN:
            self._ensure_not_last_admin(user)

        if not self._users.set_active(user.user_id, is_active=False):
            raise NotFoundError("Usuario no encontrado")
        log.info("User %s deactivated by %s", user.user_id, actor.username)

    def _ensure_not_last_admin(self, user: User) -> None:
        if self._users.count_active_with_role(Role.SUPER_ADMIN) <= 1:
            raise ValidationError("Debe existir al menos un Super Administrador activo")
