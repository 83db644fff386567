# repositories/mongo_repository.py

"""
MongoDB repositories for private items and contact messages.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from ..core.config import settings
from ..interfaces.private_item_repository_interface import (
    ContactRepositoryInterface,
    PrivateItemRepositoryInterface,
)
from ..schemas.auth_schemas import PrivateItem
from ..schemas.portfolio_schemas import ContactMessage
from common.logger import LoggerFactory, LoggerType, LogLevel


def _to_item(doc: Dict[str, Any]) -> PrivateItem:
    doc = dict(doc)
    doc.pop("_id", None)
    doc["id"] = doc.pop("item_id")
    return PrivateItem(**doc)


class MongoPrivateItemRepository(PrivateItemRepositoryInterface):
    """MongoDB implementation of PrivateItemRepositoryInterface"""

    def __init__(
        self,
        mongo_url: str,
        database_name: str = "portfolio",
        collection_name: str = "private_items",
        client: Optional[AsyncIOMotorClient] = None,
    ):
        """
        Initialize MongoDB private item repository

        Args:
            mongo_url: MongoDB connection URL
            database_name: Database name
            collection_name: Collection holding the items
            client: Existing client to share
        """
        self.client: AsyncIOMotorClient = client or AsyncIOMotorClient(mongo_url)
        self.db: AsyncIOMotorDatabase = self.client[database_name]
        self.collection: AsyncIOMotorCollection = self.db[collection_name]

        self.logger = LoggerFactory.get_logger(
            name="mongo-private-item-repository",
            logger_type=LoggerType.STANDARD,
            level=LogLevel.INFO,
            file_level=LogLevel.DEBUG,
            log_file=f"{settings.log_file_path}mongo_private_item_repository.log",
        )
        self.logger.info(f"MongoDB private item repository using database: {database_name}")

    async def initialize(self) -> None:
        """Create indexes"""
        try:
            await self.collection.create_index(
                [("item_id", ASCENDING)], unique=True, name="item_id_unique"
            )
            await self.collection.create_index(
                [("owner", ASCENDING), ("created_at", ASCENDING)], name="owner_created_idx"
            )
            self.logger.info("MongoDB private item indexes created successfully")
        except Exception as e:
            self.logger.error(f"Failed to initialize private item indexes: {e}")
            raise

    async def close(self) -> None:
        self.client.close()

    async def list_items(self, owner: str) -> List[PrivateItem]:
        cursor = self.collection.find({"owner": owner}).sort("created_at", ASCENDING)
        return [_to_item(doc) async for doc in cursor]

    async def get_item(self, owner: str, item_id: str) -> Optional[PrivateItem]:
        doc = await self.collection.find_one({"item_id": item_id, "owner": owner})
        return _to_item(doc) if doc else None

    async def save_item(self, item: PrivateItem) -> PrivateItem:
        doc = item.model_dump(exclude={"id"})
        doc["item_id"] = item.id
        await self.collection.insert_one(doc)
        self.logger.debug(f"Saved private item {item.id}")
        return item

    async def update_item(
        self, owner: str, item_id: str, changes: Dict[str, Any]
    ) -> Optional[PrivateItem]:
        doc = await self.collection.find_one_and_update(
            {"item_id": item_id, "owner": owner},
            {"$set": {**changes, "updated_at": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        return _to_item(doc) if doc else None

    async def delete_item(self, owner: str, item_id: str) -> bool:
        result = await self.collection.delete_one({"item_id": item_id, "owner": owner})
        return result.deleted_count > 0

    async def health_check(self) -> bool:
        try:
            await self.client.admin.command("ping")
            return True
        except Exception as e:
            self.logger.error(f"MongoDB health check failed: {e}")
            return False


class MongoContactRepository(ContactRepositoryInterface):
    """MongoDB implementation of ContactRepositoryInterface"""

    def __init__(
        self,
        mongo_url: str,
        database_name: str = "portfolio",
        collection_name: str = "contact_messages",
        client: Optional[AsyncIOMotorClient] = None,
    ):
        # a shared client is closed by its owner
        self._owns_client = client is None
        self.client: AsyncIOMotorClient = client or AsyncIOMotorClient(mongo_url)
        self.collection: AsyncIOMotorCollection = self.client[database_name][collection_name]

    async def close(self) -> None:
        if self._owns_client:
            self.client.close()

    async def save_message(self, message: ContactMessage) -> str:
        doc = message.model_dump(exclude={"id"})
        doc["message_id"] = message.id
        await self.collection.insert_one(doc)
        return message.id

    async def list_messages(self, limit: int = 100) -> List[ContactMessage]:
        cursor = self.collection.find().sort("created_at", DESCENDING).limit(limit)
        messages = []
        async for doc in cursor:
            doc.pop("_id", None)
            doc["id"] = doc.pop("message_id")
            messages.append(ContactMessage(**doc))
        return messages
