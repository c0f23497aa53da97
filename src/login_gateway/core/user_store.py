"""User store interface for pluggable identity backends"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class UserRecord:
    """User record returned by the user store"""

    email: str
    customer_id: Any
    attributes: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserRecord":
        """
        Build a record from the store's JSON representation.

        Raises:
            KeyError: If email or customer_id is missing
        """
        attributes = {
            key: value
            for key, value in data.items()
            if key not in ("email", "customer_id")
        }
        return cls(
            email=data["email"],
            customer_id=data["customer_id"],
            attributes=attributes,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.attributes,
            "email": self.email,
            "customer_id": self.customer_id,
        }


class IUserStore(ABC):
    """
    Interface for user stores.

    Implementations must:
    1. Look users up by lowercased email
    2. Check the credential when one is given
    3. Fall back to identity-only lookup when the credential is None
       (the identity was already verified by a session token or provider)
    """

    @abstractmethod
    async def get_user(self, email: str, password: Optional[str] = None) -> UserRecord:
        """
        Resolve a user.

        Args:
            email: Lowercased email address
            password: Credential to check, or None for identity-only lookup

        Returns:
            UserRecord for the resolved user

        Raises:
            UserLookupError: Unknown user, wrong credential or store unavailable
        """
        pass

    @abstractmethod
    def get_store_name(self) -> str:
        """Return the name of this user store"""
        pass
