"""
Service / facade layer.

This module holds the little request handling there is before a store
call. It is free of Mongo specifics: it calls `UserRepo` (or anything
with the same four methods) to perform database operations.

Key responsibilities:
- parse the list size from its raw path text
- delegate each operation to the repository exactly once
"""

from typing import List
import re

from errors import InvalidArgument
from models import INT64_MAX, InsertAck, User
from repo_users import UserRepo


# ASCII digits only, with an optional sign; no whitespace or underscores.
SIZE_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_size(raw: str) -> int:
    """Parse a base-10, non-negative list size.

    Raises `InvalidArgument` with a message naming the rejected text.
    """

    if not SIZE_PATTERN.fullmatch(raw):
        raise InvalidArgument(f'invalid size "{raw}": not a base-10 integer')
    size = int(raw)
    if size > INT64_MAX:
        raise InvalidArgument(f'invalid size "{raw}": value out of range')
    if size < 0:
        raise InvalidArgument(f'invalid size "{raw}": must not be negative')
    return size


class UserService:
    """Request parsing + delegation.

    Example usage:
        repo = UserRepo(connect(settings))
        svc = UserService(repo)
        svc.list_users("10")
    """

    def __init__(self, repo: UserRepo):
        self.repo = repo

    def list_users(self, size: str) -> List[User]:
        """Return at most `size` users.

        A size of zero short-circuits to an empty list, since the store
        would read a zero limit as unlimited.
        """

        limit = parse_size(size)
        if limit == 0:
            return []
        return self.repo.list_users(limit)

    def insert_user(self, user: User) -> InsertAck:
        """Store `user` as sent and return the generated identifier."""

        return self.repo.insert_user(user)

    def delete_user(self, uid: str) -> User:
        """Remove the user matching `uid` and return it."""

        return self.repo.delete_user(uid)

    def update_user(self, uid: str, user: User) -> User:
        """Replace the fields of the user matching `uid`; return the result."""

        return self.repo.update_user(uid, user)

    def close(self) -> None:
        """Release the repository's connection."""

        self.repo.close()
