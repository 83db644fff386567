# repositories/in_memory_repository.py

"""
Process-local repositories, used by default and in tests.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..interfaces.private_item_repository_interface import (
    ContactRepositoryInterface,
    PrivateItemRepositoryInterface,
)
from ..schemas.auth_schemas import PrivateItem
from ..schemas.portfolio_schemas import ContactMessage
from common.logger import LoggerFactory, LoggerType, LogLevel


class InMemoryPrivateItemRepository(PrivateItemRepositoryInterface):
    def __init__(self):
        self._items: Dict[str, PrivateItem] = {}
        self._lock = asyncio.Lock()
        self.logger = LoggerFactory.get_logger(
            name="in-memory-private-item-repository",
            logger_type=LoggerType.STANDARD,
            level=LogLevel.INFO,
        )

    async def list_items(self, owner: str) -> List[PrivateItem]:
        items = [i for i in self._items.values() if i.owner == owner]
        return sorted(items, key=lambda i: i.created_at)

    async def get_item(self, owner: str, item_id: str) -> Optional[PrivateItem]:
        item = self._items.get(item_id)
        return item if item and item.owner == owner else None

    async def save_item(self, item: PrivateItem) -> PrivateItem:
        async with self._lock:
            self._items[item.id] = item
        self.logger.debug(f"Saved private item {item.id}")
        return item

    async def update_item(
        self, owner: str, item_id: str, changes: Dict[str, Any]
    ) -> Optional[PrivateItem]:
        async with self._lock:
            item = self._items.get(item_id)
            if item is None or item.owner != owner:
                return None
            updated = item.model_copy(
                update={**changes, "updated_at": datetime.now(timezone.utc)}
            )
            self._items[item_id] = updated
        return updated

    async def delete_item(self, owner: str, item_id: str) -> bool:
        async with self._lock:
            item = self._items.get(item_id)
            if item is None or item.owner != owner:
                return False
            del self._items[item_id]
        return True

    async def health_check(self) -> bool:
        return True


class InMemoryContactRepository(ContactRepositoryInterface):
    def __init__(self):
        self._messages: List[ContactMessage] = []

    async def save_message(self, message: ContactMessage) -> str:
        self._messages.append(message)
        return message.id

    async def list_messages(self, limit: int = 100) -> List[ContactMessage]:
        return list(reversed(self._messages))[:limit]
