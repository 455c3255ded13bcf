"""User account use cases: first-run bootstrap, login and administration."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace

from inventory_recon.config import SETTINGS
from inventory_recon.domain.models import UserAccount, UserRole
from inventory_recon.domain.repositories import UserRepository
from inventory_recon.errors import UserAccountError
from inventory_recon.infrastructure.security.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BootstrapAdminUseCase:
    """Creates the root administrator when no account exists yet."""

    repository: UserRepository

    def needed(self) -> bool:
        return not self.repository.list_users()

    def execute(self, username: str, password: str, name: str) -> UserAccount:
        if not self.needed():
            raise UserAccountError("Accounts already exist; bootstrap is only allowed on first run")
        username = username.strip()
        if not username or not password:
            raise UserAccountError("Username and password are required")
        admin = UserAccount(
            id=SETTINGS.root_admin_id,
            username=username,
            password_hash=hash_password(password),
            role=UserRole.ADMIN,
            name=name.strip() or username,
        )
        self.repository.save_users([admin])
        logger.info("Bootstrapped administrator %s", username)
        return admin


@dataclass(slots=True)
class AuthenticateUserUseCase:
    repository: UserRepository

    def execute(self, username: str, password: str) -> UserAccount | None:
        for user in self.repository.list_users():
            if user.username == username and verify_password(password, user.password_hash):
                return user
        logger.info("Failed login for %s", username)
        return None


@dataclass(slots=True)
class SaveUserUseCase:
    repository: UserRepository

    def execute(
        self,
        name: str,
        username: str,
        password: str,
        role: UserRole,
        user_id: str | None = None,
    ) -> UserAccount:
        users = self.repository.list_users()
        name = name.strip()
        if not name:
            raise UserAccountError("Name is required")

        if user_id is not None:
            return self._update(users, user_id, name, password, role)

        username = username.strip()
        if not username or not password:
            raise UserAccountError("Username and password are required")
        if any(user.username == username for user in users):
            raise UserAccountError(f"Username {username!r} already exists")
        account = UserAccount(
            id=str(uuid.uuid4()),
            username=username,
            password_hash=hash_password(password),
            role=UserRole(role),
            name=name,
        )
        self.repository.save_users([*users, account])
        logger.info("Created user %s (%s)", username, account.role.value)
        return account

    def _update(
        self,
        users: list[UserAccount],
        user_id: str,
        name: str,
        password: str,
        role: UserRole,
    ) -> UserAccount:
        current = next((user for user in users if user.id == user_id), None)
        if current is None:
            raise UserAccountError(f"Unknown user {user_id!r}")
        if user_id == SETTINGS.root_admin_id and UserRole(role) is not UserRole.ADMIN:
            raise UserAccountError("The root administrator must keep the ADMIN role")
        # The username is immutable once created.
        updated = replace(
            current,
            name=name,
            role=UserRole(role),
            password_hash=hash_password(password) if password else current.password_hash,
        )
        self.repository.save_users([updated if user.id == user_id else user for user in users])
        logger.info("Updated user %s", current.username)
        return updated


@dataclass(slots=True)
class DeleteUserUseCase:
    repository: UserRepository

    def execute(self, user_id: str, acting_user: UserAccount) -> None:
        if user_id in (acting_user.id, SETTINGS.root_admin_id):
            raise UserAccountError("You cannot delete yourself or the root administrator")
        users = self.repository.list_users()
        remaining = [user for user in users if user.id != user_id]
        if len(remaining) == len(users):
            raise UserAccountError(f"Unknown user {user_id!r}")
        self.repository.save_users(remaining)
        logger.info("Deleted user %s", user_id)
