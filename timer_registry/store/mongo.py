"""MongoDB storage gateway."""
from typing import Any, Generator, Mapping

from loguru import logger
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from ..errors import DuplicateKeyViolation
from .base import Document, Filter

logger = logger.bind(module="store.mongo")


class MongoGateway:
    """Storage gateway over one MongoDB collection.

    The client is created once per process and shared by all executor
    threads; pymongo pools connections internally.
    """

    def __init__(self, collection: Collection, client: MongoClient | None = None):
        self.collection = collection
        self._client = client

    @classmethod
    def connect(
        cls,
        uri: str,
        database: str = "Timers",
        collection: str = "UDSF",
        timeout_ms: int = 10000,
    ) -> "MongoGateway":
        """Connect, verify the server answers, and ensure the unique timerid index.

        Any failure here propagates; the service must not start without a store.
        """
        client: MongoClient = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
        client.admin.command("ping")
        coll = client[database][collection]
        coll.create_index([("timerid", ASCENDING)], unique=True)
        logger.info(f"Successfully connected to MongoDB ({database}.{collection})")
        return cls(coll, client)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def find_one(self, filter: Filter) -> Document | None:
        return self.collection.find_one(dict(filter), projection={"_id": False})

    def find(self, filter: Filter) -> Generator[Document, None, None]:
        with self.collection.find(dict(filter), projection={"_id": False}) as cursor:
            yield from cursor

    def insert_one(self, document: Document) -> None:
        # insert_one adds _id to the dict it is given
        try:
            self.collection.insert_one(dict(document))
        except DuplicateKeyError as e:
            raise DuplicateKeyViolation(document.get("timerid")) from e

    def find_one_and_update(
        self, filter: Filter, update: Mapping[str, Any]
    ) -> Document | None:
        try:
            return self.collection.find_one_and_update(
                dict(filter),
                dict(update),
                projection={"_id": False},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise DuplicateKeyViolation(filter.get("timerid")) from e

    def count_documents(self, filter: Filter) -> int:
        return self.collection.count_documents(dict(filter))
