# 📄 File: authhub/modules/user_management/application/operations/user.py
# 🧭 Purpose (Layman Explanation):
# The everyday account actions: sign a new user up, look one up, list them, change their details
# and remove them. Each action reports exactly one result, like "done" or "that email is taken".
#
# 🧪 Purpose (Technical Summary):
# User lifecycle operations built on the typed-output Operation base. CreateUser publishes
# UserCreated and DeleteUser publishes UserDeleted once their unit of work succeeded; every other
# outcome is a declared channel, and unexpected collaborator failures become ERROR emissions.
#
# 🔗 Dependencies:
# - authhub.shared.core.operation (Operation base)
# - user_management domain repositories, models, events and security services
# - user_management application commands and queries
#
# 🔄 Connected Modules / Calls From:
# - authhub.shared.core.dependencies (per-request factories)
# - authhub.modules.user_management.presentation.api.v1.users

from enum import Enum
from typing import Any, Mapping, Optional, Union

from authhub.modules.user_management.application.commands.user_commands import (
    CreateUserCommand,
    DeleteUserCommand,
    UpdateUserCommand,
)
from authhub.modules.user_management.application.queries.user_queries import GetAllUsersQuery, GetUserQuery
from authhub.modules.user_management.domain.events.user_events import UserCreated, UserDeleted
from authhub.modules.user_management.domain.models.user import UserWithPassword
from authhub.modules.user_management.domain.repositories.user_repository import UserRepository
from authhub.modules.user_management.domain.services.security import PasswordHasher
from authhub.shared.core.exceptions import DuplicateResourceError
from authhub.shared.core.operation import Operation
from authhub.shared.utils.logging import get_logger

logger = get_logger(__name__)


class CreateUser(Operation):
    """
    Register a new account.

    Checks email then username uniqueness, hashes the password, stores the
    user and publishes ``UserCreated`` before emitting ``SUCCESS`` with the
    stored user. A concurrent signup that wins the race between the lookup
    and the insert is reported as ``USER_EXISTS`` too.
    """

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        VALIDATION_ERROR = "VALIDATION_ERROR"
        USER_EXISTS = "USER_EXISTS"

    failure_code = "CREATE_USER_FAILED"

    def __init__(self, users: UserRepository, hasher: PasswordHasher, event_bus, logger=None):
        super().__init__(logger=logger, event_bus=event_bus)
        self._users = users
        self._hasher = hasher

    async def run(self, command: Union[CreateUserCommand, Mapping[str, Any]]) -> None:
        command = self.validate_input(CreateUserCommand, command)
        if command is None:
            return

        logger.info(f"CreateUser started for email: {command.email}", email=command.email)

        if await self._users.get_by_email(command.email):
            self.emit(self.Output.USER_EXISTS, f"User with email {command.email} already exists.")
            return

        if await self._users.get_by_username(command.username):
            self.emit(self.Output.USER_EXISTS, f"Username {command.username} is already taken.")
            return

        password_hash = await self._hasher.hash(command.password)
        try:
            created = await self._users.create(
                UserWithPassword(
                    name=command.name,
                    email=command.email,
                    username=command.username,
                    role=command.role,
                    birth_date=command.birth_date,
                    gender=command.gender,
                    password_hash=password_hash,
                )
            )
        except DuplicateResourceError as e:
            if e.field == "username":
                self.emit(self.Output.USER_EXISTS, f"Username {command.username} is already taken.")
            else:
                self.emit(self.Output.USER_EXISTS, f"User with email {command.email} already exists.")
            return

        self.publish(UserCreated(user=created))
        logger.info(f"Published UserCreated for user {created.id}", user_id=created.id)

        self.emit_success(created)


class GetUser(Operation):
    """Find a user by id, falling back to email."""

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        VALIDATION_ERROR = "VALIDATION_ERROR"
        USER_NOT_FOUND = "USER_NOT_FOUND"

    failure_code = "GET_USER_FAILED"

    def __init__(self, users: UserRepository, logger=None):
        super().__init__(logger=logger)
        self._users = users

    async def run(self, query: Union[GetUserQuery, Mapping[str, Any]]) -> None:
        query = self.validate_input(GetUserQuery, query)
        if query is None:
            return

        user = None
        if query.user_id:
            user = await self._users.get_by_id(query.user_id)
        if user is None and query.email:
            user = await self._users.get_by_email(query.email)

        if user is None:
            criteria = f"ID {query.user_id}" if query.user_id else f"email {query.email}"
            self.emit(self.Output.USER_NOT_FOUND, f"User not found with the provided criteria: {criteria}.")
            return

        self.emit_success(user)


class GetAllUsers(Operation):
    """One page of the user listing."""

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        VALIDATION_ERROR = "VALIDATION_ERROR"

    failure_code = "GET_USERS_FAILED"

    def __init__(self, users: UserRepository, logger=None):
        super().__init__(logger=logger)
        self._users = users

    async def run(self, query: Optional[Union[GetAllUsersQuery, Mapping[str, Any]]] = None) -> None:
        query = self.validate_input(GetAllUsersQuery, query if query is not None else {})
        if query is None:
            return

        page = await self._users.list(page=query.page, limit=query.limit)
        self.emit_success(page)


class UpdateUser(Operation):
    """
    Partially update a user.

    Email and username changes are checked against other accounts; a new
    password is hashed before it is stored.
    """

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        VALIDATION_ERROR = "VALIDATION_ERROR"
        USER_NOT_FOUND = "USER_NOT_FOUND"
        EMAIL_TAKEN = "EMAIL_TAKEN"
        USERNAME_TAKEN = "USERNAME_TAKEN"

    failure_code = "UPDATE_USER_FAILED"

    def __init__(self, users: UserRepository, hasher: PasswordHasher, logger=None):
        super().__init__(logger=logger)
        self._users = users
        self._hasher = hasher

    async def run(self, user_id: str, updates: Union[UpdateUserCommand, Mapping[str, Any]]) -> None:
        if not user_id:
            self.emit(self.Output.VALIDATION_ERROR, {"message": "User ID is required", "errors": []})
            return

        command = self.validate_input(UpdateUserCommand, updates)
        if command is None:
            return

        existing = await self._users.get_by_id(user_id)
        if existing is None:
            self.emit(self.Output.USER_NOT_FOUND, f"User with id {user_id} not found")
            return

        changes = command.changes()

        new_email = changes.get("email")
        if new_email and new_email != existing.email:
            owner = await self._users.get_by_email(new_email)
            if owner is not None and owner.id != user_id:
                self.emit(self.Output.EMAIL_TAKEN, f"Email {new_email} is already in use")
                return

        new_username = changes.get("username")
        if new_username and new_username != existing.username:
            owner = await self._users.get_by_username(new_username)
            if owner is not None and owner.id != user_id:
                self.emit(self.Output.USERNAME_TAKEN, f"Username {new_username} is already taken")
                return

        if "password" in changes:
            changes["password_hash"] = await self._hasher.hash(changes.pop("password"))

        try:
            updated = await self._users.update(user_id, changes)
        except DuplicateResourceError as e:
            if e.field == "email":
                self.emit(self.Output.EMAIL_TAKEN, f"Email {new_email} is already in use")
            elif e.field == "username":
                self.emit(self.Output.USERNAME_TAKEN, f"Username {new_username} is already taken")
            else:
                raise
            return

        if updated is None:
            self.emit(self.Output.USER_NOT_FOUND, f"User with id {user_id} not found")
            return

        logger.info("User updated", user_id=user_id, fields=sorted(changes))
        self.emit_success(updated)


class DeleteUser(Operation):
    """Remove a user and announce it with ``UserDeleted``."""

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        VALIDATION_ERROR = "VALIDATION_ERROR"
        USER_NOT_FOUND = "USER_NOT_FOUND"

    failure_code = "DELETE_USER_FAILED"

    def __init__(self, users: UserRepository, event_bus, logger=None):
        super().__init__(logger=logger, event_bus=event_bus)
        self._users = users

    async def run(self, command: Union[str, DeleteUserCommand, Mapping[str, Any], None]) -> None:
        if command is None or isinstance(command, str):
            command = {"user_id": command or ""}
        command = self.validate_input(DeleteUserCommand, command)
        if command is None:
            return

        user = await self._users.get_by_id(command.user_id)
        if user is None:
            self.emit(self.Output.USER_NOT_FOUND, f"User with id of {command.user_id} was not found")
            return

        if not await self._users.delete(user.id):
            self.emit(self.Output.USER_NOT_FOUND, f"User with id of {command.user_id} was not found")
            return

        self.publish(UserDeleted(user_id=user.id))
        self.emit_success({"user_id": user.id, "message": "Deletion was successful"})
