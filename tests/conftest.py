"""
Shared fixtures.

The HTTP surface is exercised against an in-memory repository that
honours the same four-operation contract as `UserRepo`, so no MongoDB
server is needed.
"""
from typing import List

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from errors import NotFound, StoreFailure
from main import create_app
from models import InsertAck, User
from repo_users import NO_DOCUMENTS_MESSAGE, UID_FIELD
from service_users import UserService


class InMemoryUserRepo:
    """Keeps documents in a list, in insertion order."""

    def __init__(self):
        self.docs: List[dict] = []
        self.calls: List[str] = []
        self.closed = False

    def _match(self, uid):
        for doc in self.docs:
            if doc.get(UID_FIELD) == uid:
                return doc
        return None

    def list_users(self, limit):
        self.calls.append("list")
        return [User.model_validate(doc) for doc in self.docs[:limit]]

    def insert_user(self, user):
        self.calls.append("insert")
        doc = user.model_dump()
        doc["_id"] = ObjectId()
        self.docs.append(doc)
        return InsertAck(inserted_id=str(doc["_id"]))

    def delete_user(self, uid):
        self.calls.append("delete")
        doc = self._match(uid)
        if doc is None:
            raise NotFound(NO_DOCUMENTS_MESSAGE)
        self.docs.remove(doc)
        return User.model_validate(doc)

    def update_user(self, uid, user):
        self.calls.append("update")
        doc = self._match(uid)
        if doc is None:
            raise NotFound(NO_DOCUMENTS_MESSAGE)
        doc.update(user.model_dump())
        return User.model_validate(doc)

    def close(self):
        self.closed = True


class UnreachableUserRepo(InMemoryUserRepo):
    """Every store call fails the way a dropped connection does."""

    message = "localhost:27017: [Errno 111] Connection refused"

    def list_users(self, limit):
        raise StoreFailure(self.message)

    def insert_user(self, user):
        raise StoreFailure(self.message)

    def delete_user(self, uid):
        raise StoreFailure(self.message)

    def update_user(self, uid, user):
        raise StoreFailure(self.message)


@pytest.fixture
def repo():
    return InMemoryUserRepo()


@pytest.fixture
def client(repo):
    """Test client bound to the in-memory repository."""
    return TestClient(create_app(UserService(repo)))


@pytest.fixture
def broken_client():
    """Test client whose store is unreachable."""
    return TestClient(create_app(UserService(UnreachableUserRepo())))


@pytest.fixture
def seed(repo):
    """Insert `n` users, optionally tagging them with `_uid` values."""

    def _seed(n, uids=None):
        for i in range(n):
            doc = User(age=20 + i, name=f"name{i}", surname=f"surname{i}").model_dump()
            doc["_id"] = ObjectId()
            if uids:
                doc[UID_FIELD] = uids[i]
            repo.docs.append(doc)
        return repo.docs

    return _seed
