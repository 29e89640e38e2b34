"""
Centralized runtime configuration for the users service.

This module uses `python-dotenv` to read a local `.env` file during
development and exposes a Pydantic `Settings` model named `settings`.

Environment variables used:
- `MONGODB_URI` — MongoDB connection string used by `db.connect()`.
- `DB_NAME` / `COLLECTION_NAME` — where user documents live.
- `CONNECT_TIMEOUT_SECONDS` — budget for the startup connect + ping.
- `NOT_FOUND_STATUS` — status returned when delete/update match nothing.
  Defaults to 304 for compatibility with existing clients; set to 404
  for the standard code.
- `LOG_LEVEL` — root logger level.

Example `.env`:
MONGODB_URI=mongodb://localhost:27017
DB_NAME=userdb
NOT_FOUND_STATUS=404
"""

from pydantic import BaseModel
import os
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseModel):
    """Typed settings container.

    All downstream code should import `settings` from this module. Use
    these attributes (not os.getenv) so tests can monkeypatch `settings`.
    """

    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    db_name: str = os.getenv("DB_NAME", "userdb")
    collection_name: str = os.getenv("COLLECTION_NAME", "loginusers")
    connect_timeout_seconds: float = float(os.getenv("CONNECT_TIMEOUT_SECONDS", "10"))
    not_found_status: int = int(os.getenv("NOT_FOUND_STATUS", "304"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
