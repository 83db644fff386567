# interfaces/private_item_repository_interface.py

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..schemas.auth_schemas import PrivateItem
from ..schemas.portfolio_schemas import ContactMessage


class PrivateItemRepositoryInterface(ABC):
    """Abstract interface for private item storage"""

    async def initialize(self) -> None:
        """Prepare the backing store"""

    async def close(self) -> None:
        """Release connections"""

    @abstractmethod
    async def list_items(self, owner: str) -> List[PrivateItem]:
        """
        List an owner's items, oldest first

        Args:
            owner: Username

        Returns:
            List[PrivateItem]: The owner's items
        """
        pass

    @abstractmethod
    async def get_item(self, owner: str, item_id: str) -> Optional[PrivateItem]:
        pass

    @abstractmethod
    async def save_item(self, item: PrivateItem) -> PrivateItem:
        """Insert a new item"""
        pass

    @abstractmethod
    async def update_item(
        self, owner: str, item_id: str, changes: Dict[str, Any]
    ) -> Optional[PrivateItem]:
        """
        Apply field changes to an item

        Returns:
            Optional[PrivateItem]: Updated item, None if it does not exist
        """
        pass

    @abstractmethod
    async def delete_item(self, owner: str, item_id: str) -> bool:
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass


class ContactRepositoryInterface(ABC):
    """Abstract interface for contact form submissions"""

    async def close(self) -> None:
        """Release connections"""

    @abstractmethod
    async def save_message(self, message: ContactMessage) -> str:
        pass

    @abstractmethod
    async def list_messages(self, limit: int = 100) -> List[ContactMessage]:
        pass
