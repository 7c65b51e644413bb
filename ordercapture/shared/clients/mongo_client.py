from typing import Any, Dict, Optional

from pymongo import AsyncMongoClient

from ordercapture.shared.endpoints import endpoint_host
from ordercapture.shared.logger import StructuredLogger


class MongoStoreClient:
    """Long-lived async MongoDB / Cosmos DB handle exposing a single-document insert."""

    def __init__(
        self,
        url: str,
        database: str = "k8orders",
        logger: Optional[StructuredLogger] = None,
    ):
        self.url = url
        self.database = database
        self.logger = logger or StructuredLogger("MongoStoreClient")
        self._client: Optional[AsyncMongoClient] = None

    @property
    def endpoint(self) -> str:
        """Server list without credentials, e.g. ``mongo-0:27017``."""
        return endpoint_host(self.url)

    # --- Lifecycle ---
    def connect(self) -> AsyncMongoClient:
        # AsyncMongoClient connects lazily on first operation
        if self._client is None:
            self._client = AsyncMongoClient(self.url)
            self.logger.info("MongoDB client created", endpoint=self.endpoint, database=self.database)
        return self._client

    async def close(self):
        if self._client is not None:
            await self._client.close()
            self._client = None
            self.logger.info("MongoDB client closed", endpoint=self.endpoint)

    # --- Writes ---
    async def insert_one(self, collection: str, document: Dict[str, Any]) -> str:
        """Insert one document and return its ``_id`` as a string."""
        client = self.connect()
        result = await client[self.database][collection].insert_one(document)
        return str(result.inserted_id)
