"""
DocRelay Backend — Middleware Tests
====================================

What:  Request-ID resolution and the action-tagged access log line.
"""

import logging

import pytest

from docrelay.middleware.logging import action_for, level_for
from docrelay.middleware.request_id import resolve_request_id


class TestResolveRequestId:

    def test_safe_client_id_is_kept(self):
        assert resolve_request_id("trace-01.a_b") == "trace-01.a_b"

    @pytest.mark.parametrize("supplied", [None, "", "has space", "x" * 65, "bad\nline"])
    def test_unsafe_client_id_is_replaced(self, supplied):
        rid = resolve_request_id(supplied)
        assert rid != supplied
        assert len(rid) == 8


class TestActionLabels:

    @pytest.mark.parametrize(
        "method, path, action",
        [
            ("GET", "/test", "MongoDB insert"),
            ("POST", "/create", "Create"),
            ("POST", "/create/", "Create"),
            ("GET", "/read", "Read"),
            ("GET", "/create", "-"),
            ("GET", "/", "-"),
        ],
    )
    def test_action_for(self, method, path, action):
        assert action_for(method, path) == action

    def test_level_for(self):
        assert level_for(200) == logging.INFO
        assert level_for(422) == logging.WARNING
        assert level_for(500) == logging.ERROR


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_read_is_logged_with_action(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="docrelay.access")

        await test_client.get("/read", headers={"X-Request-ID": "rid-42"})

        [record] = [r for r in caplog.records if r.name == "docrelay.access"]
        assert record.getMessage().startswith("[rid-42] Read GET /read -> 200 (")
        assert record.action == "Read"
        assert record.levelno == logging.INFO

    @pytest.mark.asyncio
    async def test_storage_failure_logged_as_error(self, offline_client, caplog):
        caplog.set_level(logging.INFO, logger="docrelay.access")

        await offline_client.post("/create", json={"k": "v"})

        [record] = [r for r in caplog.records if r.name == "docrelay.access"]
        assert record.action == "Create"
        assert record.status == 500
        assert record.levelno == logging.ERROR

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="docrelay.access")

        await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "docrelay.access"]

    @pytest.mark.asyncio
    async def test_unsafe_request_id_not_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "a b c"})
        assert response.headers["X-Request-ID"] != "a b c"
