import copy

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError, OperationFailure, ServerSelectionTimeoutError

from config import Settings
from database import DocumentStore
from main import create_app
from repositories import Store


class FakeDeleteResult:
    def __init__(self, deleted_count):
        self.deleted_count = deleted_count


class FakeCollection:
    """Just enough of a pymongo Collection for the repositories."""

    def __init__(self, fail=False):
        self.docs = []
        self.unique = set()
        self.fail = fail

    def _check(self):
        if self.fail:
            raise OperationFailure("collection unavailable")

    def _matches(self, doc, query):
        return all(doc.get(k) == v for k, v in query.items())

    def create_index(self, field, unique=False):
        self._check()
        if unique:
            self.unique.add(field)

    def count_documents(self, query):
        self._check()
        return sum(1 for d in self.docs if self._matches(d, query))

    def insert_one(self, doc):
        self._check()
        for field in self.unique:
            if any(d.get(field) == doc.get(field) for d in self.docs):
                raise DuplicateKeyError(f"duplicate {field}")
        self.docs.append(copy.deepcopy(doc))

    def insert_many(self, docs):
        for doc in docs:
            self.insert_one(doc)

    def find(self, query, projection=None, limit=0):
        self._check()
        found = [copy.deepcopy(d) for d in self.docs if self._matches(d, query)]
        return found[:limit] if limit else found

    def find_one(self, query, projection=None):
        found = self.find(query, projection)
        return found[0] if found else None

    def replace_one(self, query, replacement):
        self._check()
        for index, doc in enumerate(self.docs):
            if self._matches(doc, query):
                self.docs[index] = copy.deepcopy(replacement)
                return

    def delete_one(self, query):
        self._check()
        for index, doc in enumerate(self.docs):
            if self._matches(doc, query):
                del self.docs[index]
                return FakeDeleteResult(1)
        return FakeDeleteResult(0)


class FakeDatabase(dict):
    def __init__(self, fail=False):
        super().__init__()
        self.fail = fail

    def __missing__(self, name):
        collection = self[name] = FakeCollection(fail=self.fail)
        return collection

    def list_collection_names(self):
        return list(self.keys())


class FakeClient:
    def __init__(self, fail=False):
        self.database = FakeDatabase(fail=fail)
        self.closed = False

    def __getitem__(self, name):
        return self.database

    def close(self):
        self.closed = True


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data", jwt_secret="test-secret")


@pytest.fixture
def mongo_settings(tmp_path):
    return Settings(
        database_url="mongodb://db.invalid:27017",
        data_dir=tmp_path / "data",
        jwt_secret="test-secret",
    )


@pytest.fixture
def store(settings):
    return Store(settings)


@pytest.fixture
def fake_client(monkeypatch):
    client = FakeClient()
    monkeypatch.setattr(DocumentStore, "connect", lambda self: client)
    return client


@pytest.fixture
def unreachable(monkeypatch):
    def refuse(self):
        raise ServerSelectionTimeoutError("db.invalid:27017: connection refused")

    monkeypatch.setattr(DocumentStore, "connect", refuse)


@pytest.fixture
def failing_client(monkeypatch):
    client = FakeClient(fail=True)
    monkeypatch.setattr(DocumentStore, "connect", lambda self: client)
    return client


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_client(client):
    res = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "admin123"})
    assert res.status_code == 200
    return client
