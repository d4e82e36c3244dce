# 📄 File: authhub/modules/user_management/domain/repositories/token_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how stored one-time codes (email verification, password reset) are saved, looked up and thrown away
# 🧪 Purpose (Technical Summary):
# Repository interface for Token entities following Repository pattern and dependency inversion principle
# 🔗 Dependencies:
# Domain models (Token, TokenType), typing, abc
# 🔄 Connected Modules / Calls From:
# Token, auth and notification operations, SQLAlchemy implementation

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models.token import Token, TokenType


class TokenRepository(ABC):
    """Repository interface for Token entity data access operations."""

    @abstractmethod
    async def create(self, token: Token) -> Token:
        """
        Persist a new token.

        Args:
            token: Token entity to store

        Returns:
            Stored Token entity
        """
        pass

    @abstractmethod
    async def get_by_id(self, token_id: str) -> Optional[Token]:
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[Token]:
        """
        Look up a token by its opaque value.

        Returns:
            Token entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_user_id(self, user_id: str, token_type: Optional[TokenType] = None) -> List[Token]:
        """
        All tokens of one user, newest first.

        Args:
            user_id: Owner of the tokens
            token_type: Restrict to one token type
        """
        pass

    @abstractmethod
    async def update(self, token_id: str, changes: Dict[str, Any]) -> Optional[Token]:
        pass

    @abstractmethod
    async def revoke(self, token_id: str) -> bool:
        """Mark a token revoked. Returns False if it does not exist."""
        pass

    @abstractmethod
    async def delete(self, token_id: str) -> bool:
        """Delete a token. Returns False if it does not exist."""
        pass

    @abstractmethod
    async def remove_expired(self) -> int:
        """
        Delete every expired token.

        Returns:
            Number of tokens deleted
        """
        pass
