import logging
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

import seeds
from auth import TokenIssuer, hash_password, verify_password
from config import Settings
from database import DocumentStore
from errors import BackendUnavailable, ConflictError, StoreError
from media import MediaResolver, post_image_url
from schemas import Doctor, Post, Product, Reservation, Slide, User, now_iso
from storage import FileStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

IMMUTABLE_FIELDS = ("id", "createdAt")


@dataclass
class Ok(Generic[T]):
    value: T
    degraded = False


@dataclass
class Degraded(Generic[T]):
    value: T
    cause: BackendUnavailable
    degraded = True


Outcome = Union[Ok, Degraded]


def generate_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(3)}"


def newest_first(records: List[dict]) -> List[dict]:
    # Later insertions win ties on createdAt
    ranked = sorted(enumerate(records), key=lambda pair: (pair[1].get("createdAt", ""), pair[0]), reverse=True)
    return [record for _, record in ranked]


def merge(existing: dict, partial: Dict[str, Any]) -> dict:
    changes = {k: v for k, v in partial.items() if v is not None and k not in IMMUTABLE_FIELDS}
    return {**existing, **changes, "updatedAt": now_iso()}


class Repository:
    """CRUD over one entity type, backed by the document store with a JSON file fallback."""

    collection: str = ""
    filename: str = ""
    id_prefix: str = ""
    model: Type[BaseModel] = BaseModel

    def __init__(self, files: FileStore, documents: DocumentStore):
        self.files = files
        self.documents = documents
        self.last_outcome: Optional[Outcome] = None
        self._records: List[dict] = []
        self._seeds: Optional[List[dict]] = None
        self._remote_ready = False

    # Hooks

    def default_records(self) -> List[dict]:
        return []

    def matches(self, record: dict, filters: Dict[str, Any]) -> bool:
        return True

    def sort(self, records: List[dict]) -> List[dict]:
        return newest_first(records)

    def prepare_collection(self, collection: Collection) -> None:
        pass

    def build(self, payload: Dict[str, Any]) -> dict:
        now = now_iso()
        record = {k: v for k, v in payload.items() if v is not None and k not in IMMUTABLE_FIELDS}
        return {"id": generate_id(self.id_prefix), **record, "createdAt": now, "updatedAt": now}

    def public(self, record: dict) -> dict:
        return self.model.model_validate(record).model_dump(by_alias=True, exclude_none=True)

    # Backends

    @property
    def seeds(self) -> List[dict]:
        if self._seeds is None:
            self._seeds = self.default_records()
        return self._seeds

    def refresh(self) -> List[dict]:
        self._records = self.files.load(self.filename, self.seeds)
        return self._records

    def persist(self) -> None:
        self.files.save(self.filename, self._records)

    def remote(self) -> Collection:
        collection = self.documents.get_database()[self.collection]
        if not self._remote_ready:
            self.prepare_collection(collection)
            if collection.count_documents({}) == 0 and self.seeds:
                collection.insert_many([dict(record) for record in self.seeds])
            self._remote_ready = True
        return collection

    def execute(self, action: str, remote: Callable[[Collection], T], local: Callable[[], T]) -> Outcome:
        if not self.documents.enabled:
            outcome: Outcome = Ok(local())
        else:
            try:
                outcome = Ok(remote(self.remote()))
            except StoreError:
                raise
            except Exception as e:
                cause = BackendUnavailable(self.collection, action, e)
                logger.warning("Document store %s failed, using file store: %s", cause, e)
                outcome = Degraded(local(), cause)
        self.last_outcome = outcome
        return outcome

    # Operations

    def select(self, records: List[dict], filters: Optional[Dict[str, Any]] = None) -> List[dict]:
        filters = {k: v for k, v in (filters or {}).items() if v is not None and v != ""}
        chosen = [r for r in records if self.matches(r, filters)]
        return [self.public(r) for r in self.sort(chosen)]

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[dict]:
        def remote(collection):
            return self.documents.get_documents(self.collection)

        def local():
            return self.refresh()

        # Malformed documents raise here rather than triggering the fallback
        return self.select(self.execute("list", remote, local).value, filters)

    def find_raw(self, record_id: str) -> Optional[dict]:
        def remote(collection):
            return collection.find_one({"id": record_id}, {"_id": 0})

        def local():
            return next((r for r in self.refresh() if r.get("id") == record_id), None)

        return self.execute("get", remote, local).value

    def get_by_id(self, record_id: str) -> Optional[dict]:
        record = self.find_raw(record_id)
        return self.public(record) if record is not None else None

    def create(self, payload: Dict[str, Any]) -> dict:
        record = self.build(payload)
        self.model.model_validate(record)

        def remote(collection):
            return self.documents.create_document(self.collection, record)

        def local():
            self.refresh()
            self._records.append(record)
            self.persist()
            return record

        return self.public(self.execute("create", remote, local).value)

    def update(self, record_id: str, partial: Dict[str, Any]) -> Optional[dict]:
        def remote(collection):
            existing = collection.find_one({"id": record_id}, {"_id": 0})
            if existing is None:
                return None
            updated = merge(existing, partial)
            collection.replace_one({"id": record_id}, updated)
            return updated

        def local():
            records = self.refresh()
            for index, existing in enumerate(records):
                if existing.get("id") == record_id:
                    records[index] = merge(existing, partial)
                    self.persist()
                    return records[index]
            return None

        updated = self.execute("update", remote, local).value
        return self.public(updated) if updated is not None else None

    def delete(self, record_id: str) -> bool:
        def remote(collection):
            return collection.delete_one({"id": record_id}).deleted_count > 0

        def local():
            records = self.refresh()
            for index, existing in enumerate(records):
                if existing.get("id") == record_id:
                    del records[index]
                    self.persist()
                    return True
            return False

        return self.execute("delete", remote, local).value


class DoctorRepository(Repository):
    collection = "doctors"
    filename = "doctors.json"
    id_prefix = "doc"
    model = Doctor

    def default_records(self):
        return seeds.default_doctors()

    def matches(self, record, filters):
        if "province" in filters and record.get("province") != filters["province"]:
            return False
        if "city" in filters and record.get("city") != filters["city"]:
            return False
        return True


class PostRepository(Repository):
    collection = "posts"
    filename = "posts.json"
    id_prefix = "post"
    model = Post

    def default_records(self):
        return seeds.default_posts()

    def matches(self, record, filters):
        if "published" in filters and bool(record.get("published")) != filters["published"]:
            return False
        return True

    def build(self, payload):
        record = super().build(payload)
        record.setdefault("published", False)
        if not record.get("image"):
            record["image"] = post_image_url(record.get("title", ""))
        return record

    def published(self) -> List[dict]:
        return self.list({"published": True})


class ProductRepository(Repository):
    collection = "products"
    filename = "products.json"
    id_prefix = "prod"
    model = Product

    def default_records(self):
        return seeds.default_products()

    def matches(self, record, filters):
        if "categoryId" in filters and record.get("categoryId") != filters["categoryId"]:
            return False
        if "search" in filters:
            term = str(filters["search"]).strip().lower()
            fields = (record.get("name"), record.get("description"), record.get("brand"))
            if not any(term in value.lower() for value in fields if isinstance(value, str)):
                return False
        return True


class SlideRepository(Repository):
    collection = "slides"
    filename = "slides.json"
    id_prefix = "slide"
    model = Slide

    def default_records(self):
        return seeds.default_slides()

    def sort(self, records):
        return sorted(records, key=lambda r: (r.get("order", 0), r.get("createdAt", "")))

    def create(self, payload):
        if payload.get("order") is None:
            payload = {**payload, "order": len(self.list()) + 1}
        return super().create(payload)


class ReservationRepository(Repository):
    collection = "reservations"
    filename = "reservations.json"
    id_prefix = "res"
    model = Reservation

    def matches(self, record, filters):
        for field in ("doctorId", "status"):
            if field in filters and record.get(field) != filters[field]:
                return False
        return True

    def build(self, payload):
        # Reservations always start out pending; nothing moves them on yet
        return {**super().build(payload), "status": "pending"}


class UserRepository(Repository):
    collection = "users"
    filename = "users.json"
    id_prefix = "user"
    model = User

    def __init__(self, files: FileStore, documents: DocumentStore):
        super().__init__(files, documents)
        self._lock = threading.Lock()

    def default_records(self):
        return seeds.default_users(hash_password(seeds.DEFAULT_ADMIN_PASSWORD))

    def sort(self, records):
        return list(records)

    def prepare_collection(self, collection):
        collection.create_index("email", unique=True)

    @staticmethod
    def normalize_email(email: str) -> str:
        return email.strip().lower()

    def get_by_email(self, email: str) -> Optional[dict]:
        normalized = self.normalize_email(email)

        def remote(collection):
            return collection.find_one({"email": normalized}, {"_id": 0})

        def local():
            return next((u for u in self.refresh() if self.normalize_email(u.get("email", "")) == normalized), None)

        user = self.execute("get_by_email", remote, local).value
        return self.public(user) if user is not None else None

    def create(self, payload):
        email = self.normalize_email(payload["email"])
        record = self.build({
            "email": email,
            "name": payload["name"].strip(),
            "password": hash_password(payload["password"]),
            "role": payload.get("role") or "user",
        })
        conflict = ConflictError("کاربری با این ایمیل قبلاً ثبت نام کرده است")

        def remote(collection):
            try:
                return self.documents.create_document(self.collection, record)
            except DuplicateKeyError:
                raise conflict

        def local():
            with self._lock:
                records = self.refresh()
                if any(self.normalize_email(u.get("email", "")) == email for u in records):
                    raise conflict
                records.append(record)
                self.persist()
            return record

        return self.public(self.execute("create", remote, local).value)

    def authenticate(self, email: str, password: str) -> Optional[dict]:
        user = self.get_by_email(email)
        if user is None:
            logger.info("Login failed, no user for %s", self.normalize_email(email))
            return None
        if not verify_password(password, user["password"]):
            logger.info("Login failed, wrong password for %s", user["email"])
            return None
        return user

    def list_masked(self) -> List[dict]:
        return [{**user, "password": "***hidden***"} for user in self.list()]


class Store:
    """Everything a request handler needs; one instance per application."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.files = FileStore(settings.data_dir, read_only=settings.read_only)
        self.documents = DocumentStore(settings)
        self.media = MediaResolver()
        self.tokens = TokenIssuer(settings.jwt_secret)

        self.doctors = DoctorRepository(self.files, self.documents)
        self.posts = PostRepository(self.files, self.documents)
        self.products = ProductRepository(self.files, self.documents)
        self.slides = SlideRepository(self.files, self.documents)
        self.reservations = ReservationRepository(self.files, self.documents)
        self.users = UserRepository(self.files, self.documents)

    @property
    def repositories(self) -> Dict[str, Repository]:
        return {
            "doctors": self.doctors,
            "posts": self.posts,
            "products": self.products,
            "slides": self.slides,
            "reservations": self.reservations,
            "users": self.users,
        }

    def close(self) -> None:
        self.documents.close()
