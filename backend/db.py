"""
Database connection helper.

This module centralizes how the MongoDB connection is created. The
service opens exactly one `MongoClient` at startup and shares the bound
collection between all requests; the driver pools connections and is
safe to use from FastAPI's worker threads.

Usage:
    from db import connect
    collection = connect(settings)
    collection.find_one({})

Startup is all-or-nothing: if the server cannot be reached within
`connect_timeout_seconds`, or does not answer `ping`, `connect()` raises
`StartupFailure` and the application refuses to start.
"""

import logging

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from errors import StartupFailure
from settings import Settings

logger = logging.getLogger(__name__)


def get_client(cfg: Settings) -> MongoClient:
    """Build a client for `cfg.mongodb_uri`.

    Only connection setup is bounded by the timeout; individual
    operations run without a deadline. `tz_aware` makes BSON datetimes
    come back as UTC-aware values so they round-trip through JSON unchanged.
    """

    timeout_ms = int(cfg.connect_timeout_seconds * 1000)
    return MongoClient(
        cfg.mongodb_uri,
        tz_aware=True,
        connectTimeoutMS=timeout_ms,
        serverSelectionTimeoutMS=timeout_ms,
    )


def connect(cfg: Settings) -> Collection:
    """Connect, verify liveness, and return the users collection."""

    try:
        client = get_client(cfg)
        client.admin.command("ping")
    except PyMongoError as e:
        raise StartupFailure(str(e)) from e

    logger.info("Connected to MongoDB at %s (%s.%s)", cfg.mongodb_uri, cfg.db_name, cfg.collection_name)
    return client[cfg.db_name][cfg.collection_name]
