"""
Repository: MongoDB operations for the users collection.

This file contains only DB interaction code. It maps `User` models to
documents and documents back to `User` models. Keep request parsing and
HTTP concerns out of this module.

Important notes:
- Delete and update filter on a field named `_uid`. Inserted documents
  never carry that field, so those operations only match documents that
  were given a `_uid` by some other writer.
- Driver errors surface as `StoreFailure`; a filter that matches nothing
  surfaces as `NotFound`.
"""

from typing import List

from pydantic import ValidationError
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from errors import NotFound, StoreFailure
from models import InsertAck, User


UID_FIELD = "_uid"
NO_DOCUMENTS_MESSAGE = "mongo: no documents in result"


def to_user(doc: dict) -> User:
    """Decode a stored document; one that does not fit `User` is a store failure."""

    try:
        return User.model_validate(doc)
    except ValidationError as e:
        raise StoreFailure(str(e)) from e


class UserRepo:
    """DB access only. No business logic here.

    Responsibilities:
    - Map `User` <-> BSON documents
    - Run exactly one driver call per operation
    - Translate driver outcomes into `errors` exceptions
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def list_users(self, limit: int) -> List[User]:
        """Return up to `limit` users in the store's natural order.

        Note that MongoDB reads `limit(0)` as "no limit"; callers that
        mean "nothing" must not reach this method.
        """

        try:
            cursor = self.collection.find({}, limit=limit)
            try:
                return [to_user(doc) for doc in cursor]
            finally:
                cursor.close()
        except PyMongoError as e:
            raise StoreFailure(str(e)) from e

    def insert_user(self, user: User) -> InsertAck:
        """Insert `user` unmodified and return the generated identifier."""

        try:
            result = self.collection.insert_one(user.model_dump())
        except PyMongoError as e:
            raise StoreFailure(str(e)) from e
        return InsertAck(inserted_id=str(result.inserted_id))

    def delete_user(self, uid: str) -> User:
        """Atomically remove the user whose `_uid` equals `uid`."""

        try:
            doc = self.collection.find_one_and_delete({UID_FIELD: uid})
        except PyMongoError as e:
            raise StoreFailure(str(e)) from e
        if doc is None:
            raise NotFound(NO_DOCUMENTS_MESSAGE)
        return to_user(doc)

    def update_user(self, uid: str, user: User) -> User:
        """Overwrite every field of the user whose `_uid` equals `uid`.

        Returns the post-update document. Never upserts.
        """

        try:
            doc = self.collection.find_one_and_update(
                {UID_FIELD: uid},
                {"$set": user.model_dump()},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StoreFailure(str(e)) from e
        if doc is None:
            raise NotFound(NO_DOCUMENTS_MESSAGE)
        return to_user(doc)

    def close(self) -> None:
        """Close the underlying client and its connection pool."""

        self.collection.database.client.close()
