from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import ValidationError, StorageConflict
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as_conflict
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, username, password_hash, role, is_active, created_at"


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, *, username: str, password_hash: str, role: Role) -> int:
        try:
            with unique_violation_as_conflict(), db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO users(username, password_hash, role, is_active) VALUES(%s,%s,%s,1)",
                    (username, password_hash, role.value),
                )
                return int(cur.lastrowid)
        except StorageConflict:
            raise ValidationError("El nombre de usuario ya existe")

    def update_user(
        self,
        user_id: int,
        *,
        username: Optional[str] = None,
        password_hash: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> bool:
        sets: list[str] = []
        params: list[object] = []
        if username is not None:
            sets.append("username=%s")
            params.append(username)
        if password_hash is not None:
            sets.append("password_hash=%s")
            params.append(password_hash)
        if role is not None:
            sets.append("role=%s")
            params.append(role.value)
        if not sets:
            return True

        params.append(int(user_id))
        try:
            with unique_violation_as_conflict(), db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"UPDATE users SET {', '.join(sets)} WHERE user_id=%s AND is_active=1", tuple(params))
                return cur.rowcount > 0
        except StorageConflict:
            raise ValidationError("El nombre de usuario ya existe")

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET is_active=%s WHERE user_id=%s", (1 if is_active else 0, int(user_id)))
            return cur.rowcount > 0

    def list_active(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE is_active=1 ORDER BY created_at DESC, user_id DESC")
            return [_to_user(r) for r in fetchall(cur)]

    def count_active_with_role(self, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM users WHERE is_active=1 AND role=%s", (role.value,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0
