import pytest
from werkzeug.security import check_password_hash

from src.qr_payroll.qr_payroll.common.auth import ActorContext
from src.qr_payroll.qr_payroll.core.enums import Role
from src.qr_payroll.qr_payroll.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)

ADMIN = ActorContext(user_id=1, username="admin", role=Role.SUPER_ADMIN)
SCANNER = ActorContext(user_id=2, username="scanner", role=Role.SCANNER)


def test_authenticate_success(container):
    s_user = container.auth_service.authenticate("admin", "admin123")

    assert s_user.user_id == 1
    assert s_user.role == Role.SUPER_ADMIN


@pytest.mark.parametrize("username, password", [("admin", "wrong"), ("ghost", "admin123")])
def test_authenticate_bad_credentials(container, username, password):
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(username, password)


def test_authenticate_requires_both_fields(container):
    with pytest.raises(ValidationError):
        container.auth_service.authenticate("", "x")


def test_inactive_user_cannot_login(container, users_repo):
    users_repo.set_active(3, is_active=False)

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("viewer", "viewer123")


def test_placeholder_hash_never_matches(container, users_repo):
    users_repo.update_user(3, password_hash="CHANGE_ME")

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("viewer", "CHANGE_ME")


def test_create_account_requires_super_admin(container):
    with pytest.raises(AuthorizationError):
        container.user_service.create_account(SCANNER, username="new", password="secret1", role="viewer")


def test_create_account(container, users_repo):
    user = container.user_service.create_account(ADMIN, username="puerta2", password="secret1", role="scanner")

    assert user.role == Role.SCANNER
    assert check_password_hash(users_repo.get_by_id(user.user_id).password_hash, "secret1")


@pytest.mark.parametrize(
    "username, password, role",
    [("admin", "secret1", "viewer"), ("x", "123", "viewer"), ("x", "secret1", "owner"), ("", "secret1", "viewer")],
)
def test_create_account_validation(container, username, password, role):
    with pytest.raises(ValidationError):
        container.user_service.create_account(ADMIN, username=username, password=password, role=role)


def test_update_account_role_and_password(container, users_repo):
    user = container.user_service.update_account(ADMIN, 3, role="scanner", password="nuevo123")

    assert user.role == Role.SCANNER
    assert check_password_hash(users_repo.get_by_id(3).password_hash, "nuevo123")


def test_cannot_demote_last_super_admin(container):
    with pytest.raises(ValidationError):
        container.user_service.update_account(ADMIN, 1, role="viewer")


def test_cannot_deactivate_self(container):
    with pytest.raises(ValidationError):
        container.user_service.deactivate(ADMIN, 1)


def test_deactivate_other_user(container):
    container.user_service.deactivate(ADMIN, 2)

    assert [u.user_id for u in container.user_service.list_active(ADMIN)] == [1, 3]
    with pytest.raises(NotFoundError):
        container.user_service.get(ADMIN, 2)


def test_last_super_admin_cannot_be_deactivated(container, users_repo):
    other_admin = container.user_service.create_account(ADMIN, username="jefe", password="secret1", role="super_admin")
    actor = ActorContext(user_id=other_admin.user_id, username="jefe", role=Role.SUPER_ADMIN)

    container.user_service.deactivate(actor, 1)
    with pytest.raises(ValidationError):
        container.user_service.deactivate(ADMIN, other_admin.user_id)


def test_update_profile_changes_password(container, users_repo):
    container.auth_service.update_profile(SCANNER, username="scanner", current_password="scanner123", new_password="otra456")

    assert container.auth_service.authenticate("scanner", "otra456").user_id == 2


def test_update_profile_requires_current_password(container):
    with pytest.raises(AuthenticationError):
        container.auth_service.update_profile(SCANNER, username="scanner", current_password="bad", new_password="otra456")


def test_update_profile_rejects_taken_username(container):
    with pytest.raises(ValidationError):
        container.auth_service.update_profile(SCANNER, username="admin")
