# services/private_item_service.py

import uuid
from typing import List

from ..core.config import settings
from ..interfaces.private_item_repository_interface import PrivateItemRepositoryInterface
from ..schemas.auth_schemas import PrivateItem, PrivateItemCreate, PrivateItemUpdate
from ..utils.exceptions import ItemNotFoundError, ValidationFailure
from common.logger import LoggerFactory, LoggerType, LogLevel


class PrivateItemService:
    """CRUD for the signed-in user's private items"""

    def __init__(self, repository: PrivateItemRepositoryInterface):
        self.repository = repository
        self.logger = LoggerFactory.get_logger(
            name="private-item-service",
            logger_type=LoggerType.STANDARD,
            level=LogLevel.INFO,
            file_level=LogLevel.DEBUG,
            log_file=f"{settings.log_file_path}private_item_service.log",
        )

    async def list_items(self, owner: str) -> List[PrivateItem]:
        return await self.repository.list_items(owner)

    async def get_item(self, owner: str, item_id: str) -> PrivateItem:
        item = await self.repository.get_item(owner, item_id)
        if item is None:
            raise ItemNotFoundError(f"Item {item_id} not found")
        return item

    async def create_item(self, owner: str, data: PrivateItemCreate) -> PrivateItem:
        item = PrivateItem(id=uuid.uuid4().hex, owner=owner, **data.model_dump())
        await self.repository.save_item(item)
        self.logger.info(f"Created {item.type} item {item.id} for {owner}")
        return item

    async def update_item(
        self, owner: str, item_id: str, data: PrivateItemUpdate
    ) -> PrivateItem:
        changes = data.model_dump(exclude_none=True)
        if not changes:
            raise ValidationFailure("Nothing to update")
        item = await self.repository.update_item(owner, item_id, changes)
        if item is None:
            raise ItemNotFoundError(f"Item {item_id} not found")
        return item

    async def delete_item(self, owner: str, item_id: str) -> None:
        if not await self.repository.delete_item(owner, item_id):
            raise ItemNotFoundError(f"Item {item_id} not found")
        self.logger.info(f"Deleted item {item_id} for {owner}")

    async def health_check(self) -> bool:
        return await self.repository.health_check()
