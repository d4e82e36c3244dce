# 📄 File: authhub/modules/user_management/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how to save, find, update, and delete user accounts without saying which database is used
# 🧪 Purpose (Technical Summary):
# Repository interface defining data access operations for User entities following Repository pattern and dependency inversion principle
# 🔗 Dependencies:
# Domain models (User, UserWithPassword, Page), typing, abc
# 🔄 Connected Modules / Calls From:
# User and auth operations, SQLAlchemy implementation, unit-test doubles

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..models.user import Page, User, UserWithPassword


class UserRepository(ABC):
    """
    Repository interface for User entity data access operations.

    Implementation Notes:
    - Concrete implementations are in infrastructure layer
    - Methods return domain entities, never database rows
    - Only ``get_by_email_with_password`` exposes the password hash
    - All operations are async for non-blocking I/O
    """

    @abstractmethod
    async def create(self, user: UserWithPassword) -> User:
        """
        Create a new user.

        Args:
            user: User entity with an already hashed password

        Returns:
            Created User entity (without password hash)

        Raises:
            DatabaseError: If the database operation fails
            DuplicateResourceError: If the email or username is already stored
        """
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ID to find

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address (case-insensitive).

        Args:
            email: Email address to find

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    async def get_by_email_with_password(self, email: str) -> Optional[UserWithPassword]:
        """
        Get user by email including the stored password hash.

        Used only by credential checks.
        """
        pass

    @abstractmethod
    async def list(self, page: int = 1, limit: int = 10) -> Page[User]:
        """
        List users, one page at a time.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            Page of users with total count and last page number
        """
        pass

    @abstractmethod
    async def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        """
        Apply a partial update.

        Args:
            user_id: User to update
            changes: Field name to new value; ``password_hash`` replaces the stored hash

        Returns:
            Updated User entity, None if the user does not exist

        Raises:
            DuplicateResourceError: If the new email or username belongs to another user
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """
        Delete user.

        Returns:
            True if a user was deleted, False if none matched
        """
        pass
