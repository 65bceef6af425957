import uuid
from datetime import datetime, timezone
from typing import Protocol

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from libs.database import Database, DatabaseConnectionError
from libs.logger import get_logger
from libs.settings import settings
from models.user_model import User

logger = get_logger(__name__)


class StoreError(Exception):
    """Raised when the backing store cannot complete an operation."""


class UserStore(Protocol):
    async def insert(self, user: User) -> str: ...

    async def list_all(self) -> list[User]: ...


def new_user_id() -> str:
    return str(uuid.uuid4())


class MongoUserStore:
    """
    Users kept as one document each, addresses embedded.

    Documents are keyed by the model's attribute names; Mongo's _id never
    leaves this class. The collection is looked up on first use, so building
    a store does no I/O.
    """

    def __init__(self, collection: AsyncIOMotorCollection | None = None):
        self.collection = collection

    async def get_collection(self) -> AsyncIOMotorCollection:
        if self.collection is None:
            try:
                self.collection = await Database.get_collection(settings.users_collection)
            except DatabaseConnectionError as e:
                raise StoreError(str(e)) from e
        return self.collection

    async def insert(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        document = user.model_copy(
            update={
                "user_id": new_user_id(),
                "date_created": now,
                "date_modified": now,
            }
        ).model_dump()

        collection = await self.get_collection()
        try:
            await collection.insert_one(document)
        except PyMongoError as e:
            logger.exception("Failed to insert user.")
            raise StoreError(str(e)) from e

        logger.info(f"Inserted user {document['user_id']}")
        return document["user_id"]

    async def list_all(self) -> list[User]:
        collection = await self.get_collection()
        try:
            # _id breaks ties between users created in the same millisecond.
            cursor = collection.find({}, {"_id": 0}).sort([("date_created", 1), ("_id", 1)])
            raw_users = await cursor.to_list(None)
        except PyMongoError as e:
            logger.exception("Failed to list users.")
            raise StoreError(str(e)) from e

        return [User.model_validate(user_dict) for user_dict in raw_users]
