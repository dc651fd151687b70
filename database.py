import logging
import threading
from typing import Any, Dict, List, Optional

from pymongo import MongoClient
from pymongo.database import Database

from config import Settings
from errors import ConfigurationError
from schemas import now_iso

logger = logging.getLogger(__name__)


class DocumentStore:
    def __init__(self, settings: Settings):
        self.url = settings.database_url
        self.name = settings.database_name
        self.timeout_ms = settings.database_timeout_ms
        self._client: Optional[MongoClient] = None
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    def connect(self) -> MongoClient:
        client = MongoClient(self.url, serverSelectionTimeoutMS=self.timeout_ms)
        try:
            client.admin.command("ping")
        except Exception:
            client.close()
            raise
        logger.info("Connected to document store %s", self.name)
        return client

    def get_database(self) -> Database:
        if not self.enabled:
            raise ConfigurationError("DATABASE_URL is not configured; document store is disabled.")

        # Only a successful connection is kept; a failed one is retried on the next call
        with self._lock:
            if self._client is None:
                self._client = self.connect()
            return self._client[self.name]

    def create_document(self, collection_name: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a document, stamping createdAt/updatedAt unless already set. Returns it without _id."""
        now = now_iso()
        document = {"createdAt": now, "updatedAt": now, **data}
        self.get_database()[collection_name].insert_one(dict(document))
        return document

    def get_documents(self, collection_name: str, filter_dict: Optional[Dict[str, Any]] = None, limit: int = 0) -> List[Dict[str, Any]]:
        cursor = self.get_database()[collection_name].find(filter_dict or {}, {"_id": 0}, limit=limit)
        return list(cursor)

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None
