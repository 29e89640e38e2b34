"""
Pydantic models used across the backend.

`User` is both the request body shape and the response shape. Documents
read back from MongoDB carry an `_id` which is not part of the model, so
it is dropped when a document is validated into a `User`.

Guidelines:
- Every field has a zero-value default; clients may omit any of them.
- Unknown fields are ignored rather than rejected.
"""

from pydantic import BaseModel, Field
from datetime import datetime, timezone


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# BSON stores integers in at most 8 bytes.
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class User(BaseModel):
        """A user record.

        Fields:
        - `age`: integer age, within the signed 64-bit range.
        - `name` / `surname`: free text.
        - `registered`: registration timestamp, stored as a BSON datetime.
          Defaults to the Unix epoch when omitted.
        """

        age: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)
        name: str = ""
        surname: str = ""
        registered: datetime = EPOCH


class InsertAck(BaseModel):
        """Acknowledgment returned by the insert endpoint."""

        inserted_id: str = Field(serialization_alias="InsertedID")
