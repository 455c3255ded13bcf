from pathlib import Path

import pytest

from inventory_recon.application.users.use_cases import (
    AuthenticateUserUseCase,
    BootstrapAdminUseCase,
    DeleteUserUseCase,
    SaveUserUseCase,
)
from inventory_recon.domain.models import UserRole
from inventory_recon.errors import UserAccountError
from inventory_recon.infrastructure.repositories.json_repositories import JsonUserRepository
from inventory_recon.infrastructure.security.passwords import hash_password, is_password_hash, verify_password
from inventory_recon.infrastructure.storage.json_store import JsonKeyValueStore


@pytest.fixture
def repo(tmp_path: Path) -> JsonUserRepository:
    return JsonUserRepository(JsonKeyValueStore(tmp_path))


def test_password_hashes_verify():
    encoded = hash_password("s3cret")

    assert encoded.startswith("$pbkdf2-sha256$")
    assert is_password_hash(encoded)
    assert not is_password_hash("s3cret")
    assert verify_password("s3cret", encoded)
    assert not verify_password("wrong", encoded)
    assert not verify_password("s3cret", "s3cret")


def test_bootstrap_creates_root_admin_once(repo: JsonUserRepository):
    bootstrap = BootstrapAdminUseCase(repo)
    assert bootstrap.needed()

    admin = bootstrap.execute("boss", "pw", "Main Admin")

    assert admin.id == "root-admin"
    assert admin.is_admin
    assert not bootstrap.needed()
    with pytest.raises(UserAccountError):
        bootstrap.execute("other", "pw", "Other")


def test_authenticate(repo: JsonUserRepository):
    BootstrapAdminUseCase(repo).execute("boss", "pw", "Main Admin")
    auth = AuthenticateUserUseCase(repo)

    assert auth.execute("boss", "pw").username == "boss"
    assert auth.execute("boss", "nope") is None
    assert auth.execute("ghost", "pw") is None


def test_create_rejects_duplicate_username(repo: JsonUserRepository):
    BootstrapAdminUseCase(repo).execute("boss", "pw", "Main Admin")
    save = SaveUserUseCase(repo)

    clerk = save.execute("Clerk One", "clerk", "pw", UserRole.CLERK)

    assert clerk.role is UserRole.CLERK
    with pytest.raises(UserAccountError, match="already exists"):
        save.execute("Clerk Two", "clerk", "pw", UserRole.CLERK)


def test_update_keeps_username_and_optionally_password(repo: JsonUserRepository):
    BootstrapAdminUseCase(repo).execute("boss", "pw", "Main Admin")
    save = SaveUserUseCase(repo)
    clerk = save.execute("Clerk", "clerk", "first", UserRole.CLERK)

    updated = save.execute("Clerk Renamed", "ignored", "", UserRole.ADMIN, user_id=clerk.id)

    assert updated.username == "clerk"
    assert updated.name == "Clerk Renamed"
    assert updated.role is UserRole.ADMIN
    assert AuthenticateUserUseCase(repo).execute("clerk", "first") is not None


def test_root_admin_keeps_admin_role(repo: JsonUserRepository):
    BootstrapAdminUseCase(repo).execute("boss", "pw", "Main Admin")

    with pytest.raises(UserAccountError):
        SaveUserUseCase(repo).execute("Main Admin", "boss", "", UserRole.CLERK, user_id="root-admin")


def test_delete_rules(repo: JsonUserRepository):
    admin = BootstrapAdminUseCase(repo).execute("boss", "pw", "Main Admin")
    save = SaveUserUseCase(repo)
    second_admin = save.execute("Second", "second", "pw", UserRole.ADMIN)
    clerk = save.execute("Clerk", "clerk", "pw", UserRole.CLERK)
    delete = DeleteUserUseCase(repo)

    with pytest.raises(UserAccountError):
        delete.execute(second_admin.id, acting_user=second_admin)
    with pytest.raises(UserAccountError):
        delete.execute(admin.id, acting_user=second_admin)

    delete.execute(clerk.id, acting_user=admin)

    assert [u.username for u in repo.list_users()] == ["boss", "second"]
