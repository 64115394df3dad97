"""
DocRelay Backend — Record Service
==================================

What:  Insert-one and read-all operations on the records collection.
Why:   Keeps driver calls and error translation out of the route handlers.
How:   Receives the RecordStore per call, performs exactly one driver call,
       and converts driver errors into StorageOperationError.
Who:   Called by the route handlers in routes/records.py.

Records are schemaless: the payload is stored as given (plus the `_id` the
driver generates) and returned as stored.
"""

import base64
import logging
from typing import Any, Dict, List

from bson import Decimal128, ObjectId
from fastapi.encoders import jsonable_encoder
from pymongo.errors import PyMongoError

from docrelay.database import RecordStore
from docrelay.exceptions import StorageConnectionError, StorageOperationError
from docrelay.schemas.record import InsertResult

logger = logging.getLogger(__name__)


def _encode_binary(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


# BSON values that have no native JSON form. bytes also covers bson.Binary;
# binary data is base64 text since it need not be valid UTF-8.
BSON_ENCODERS = {
    ObjectId: str,
    Decimal128: str,
    bytes: _encode_binary,
}


def to_jsonable(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a stored document to JSON-safe values, keeping key order.

    Every key is kept as stored: jsonable_encoder otherwise drops keys
    starting with "_sa" (its SQLAlchemy state filter).
    """
    return jsonable_encoder(
        document,
        custom_encoder=BSON_ENCODERS,
        sqlalchemy_safe=False,
    )


class RecordService:
    """
    Stateless service for record operations.

    Every public method takes an `action` label that prefixes the error
    response if the operation fails ("Create failed: ...").
    """

    async def insert_record(
        self,
        store: RecordStore,
        record: Dict[str, Any],
        action: str = "Create",
    ) -> InsertResult:
        """
        Insert one record into the records collection.

        The record is copied first: insert_one adds `_id` to the dict it
        is given and the caller's object must stay untouched.

        Raises:
            StorageOperationError: connection or insert failure.
        """
        document = dict(record)
        try:
            collection = await store.collection()
            result = await collection.insert_one(document)
        except StorageConnectionError as e:
            raise StorageOperationError(action, e.message, context=e.context) from e
        except PyMongoError as e:
            raise StorageOperationError(action, str(e)) from e

        logger.debug("Inserted record %s", result.inserted_id)
        return InsertResult(
            acknowledged=result.acknowledged,
            inserted_id=str(result.inserted_id),
        )

    async def list_records(
        self,
        store: RecordStore,
        action: str = "Read",
    ) -> List[Dict[str, Any]]:
        """
        Return every record in storage order.

        No filter, projection or limit is applied.

        Raises:
            StorageOperationError: connection or query failure.
        """
        try:
            collection = await store.collection()
            documents = await collection.find({}).to_list(None)
        except StorageConnectionError as e:
            raise StorageOperationError(action, e.message, context=e.context) from e
        except PyMongoError as e:
            raise StorageOperationError(action, str(e)) from e

        logger.debug("Read %d records", len(documents))
        try:
            return [to_jsonable(doc) for doc in documents]
        except (TypeError, ValueError) as e:
            # A BSON type written by another client with no JSON form
            raise StorageOperationError(action, str(e)) from e


# Module-level instance, imported by the routes
record_service = RecordService()
