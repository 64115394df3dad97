"""
DocRelay Backend — Record Route Handlers
=========================================

What:  The liveness text route and the three routes that touch storage.
How:   Each handler does at most one service call; failures propagate as
       StorageOperationError and are rendered by the global handler in
       main.py as "<action> failed: <message>".

Route Inventory:
    GET  /        fixed confirmation text
    GET  /test    inserts {"message": "hello mongoDB!"}
    GET  /create  fixed "POST only" text
    POST /create  inserts the JSON request body
    GET  /read    returns every record
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends
from fastapi.responses import PlainTextResponse

from docrelay.database import RecordStore, get_record_store
from docrelay.schemas.record import InsertResult
from docrelay.services.record_service import record_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Records"])

RUNNING_TEXT = "✅ Backend is running!"
POST_ONLY_TEXT = "POST only"
TEST_RECORD = {"message": "hello mongoDB!"}

TEST_INSERT_ACTION = "MongoDB insert"
CREATE_ACTION = "Create"
READ_ACTION = "Read"

# (method, path) → action label; also used by the access log
ROUTE_ACTIONS = {
    ("GET", "/test"): TEST_INSERT_ACTION,
    ("POST", "/create"): CREATE_ACTION,
    ("GET", "/read"): READ_ACTION,
}

_error_responses = {500: {"description": "Storage failure, plain text '<action> failed: <message>'"}}


@router.get("/", response_class=PlainTextResponse, summary="Liveness text")
async def root() -> str:
    return RUNNING_TEXT


@router.get(
    "/test",
    response_model=InsertResult,
    responses=_error_responses,
    summary="Insert a fixed test record",
)
async def insert_test_record(
    store: RecordStore = Depends(get_record_store),
) -> InsertResult:
    """Insert `{"message": "hello mongoDB!"}`; every call adds a new record."""
    return await record_service.insert_record(store, TEST_RECORD, action=TEST_INSERT_ACTION)


@router.get("/create", response_class=PlainTextResponse, summary="Create usage hint")
async def create_usage() -> str:
    return POST_ONLY_TEXT


@router.post(
    "/create",
    response_model=InsertResult,
    responses=_error_responses,
    summary="Insert the request body as a record",
)
async def create_record(
    record: Dict[str, Any] = Body(..., description="Any JSON object"),
    store: RecordStore = Depends(get_record_store),
) -> InsertResult:
    """
    Store the posted JSON object verbatim.

    Malformed JSON and non-object bodies are rejected by FastAPI (422)
    before this handler runs.
    """
    return await record_service.insert_record(store, record, action=CREATE_ACTION)


@router.get(
    "/read",
    responses=_error_responses,
    summary="Return all records",
)
async def read_records(
    store: RecordStore = Depends(get_record_store),
) -> List[Dict[str, Any]]:
    """All records in storage order, `_id` rendered as a hex string."""
    return await record_service.list_records(store, action=READ_ACTION)
