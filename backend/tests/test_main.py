"""
DocRelay Backend — Application Lifecycle Tests
===============================================

What:  The lifespan connects the injected store once and closes it on exit.
"""

import pytest

from docrelay.main import create_app


class TestLifespan:

    @pytest.mark.asyncio
    async def test_connects_on_startup_and_closes_on_shutdown(self, fake_store):
        app = create_app(record_store=fake_store)

        async with app.router.lifespan_context(app):
            assert fake_store.connect_calls == 1
            assert not fake_store.closed

        assert fake_store.closed

    @pytest.mark.asyncio
    async def test_failed_connect_does_not_abort_startup(self, unreachable_store):
        app = create_app(record_store=unreachable_store)

        async with app.router.lifespan_context(app):
            assert unreachable_store.connect_calls == 1

        assert unreachable_store.closed

    def test_default_store_is_created(self):
        from docrelay.database import RecordStore

        app = create_app()
        assert isinstance(app.state.record_store, RecordStore)
