"""Tests for the request-scoped SessionManager."""

import pytest

from conftest import LaggyStore, make_session
from storefront.exceptions import SessionStoreError
from storefront.session.session_manager import SessionManager


class TestSessionData:

    @pytest.mark.asyncio
    async def test_start_loads_existing_record(self, store):
        await store.upsert("sid-1", {"cart": [1, 2]})
        session = SessionManager(store, "sid-1")

        await session.start()

        assert session.get("cart") == [1, 2]
        assert not session.is_dirty()

    @pytest.mark.asyncio
    async def test_start_on_unknown_id_is_empty(self, store):
        session = SessionManager(store, "unknown")
        await session.start()
        assert session.all() == {}

    def test_put_get_pull_forget(self, store):
        session = make_session(store)

        session.put("a", 1)
        session["b"] = 2

        assert session.is_dirty()
        assert session.pull("a") == 1
        assert "a" not in session
        del session["b"]
        assert session.all() == {}

    def test_all_hides_internal_keys(self, store):
        session = make_session(store)
        session.put("_expire_at", 123.0)
        session.put("visible", True)
        assert session.all() == {"visible": True}

    def test_set_user_dedupes_roles(self, store):
        session = make_session(store)

        session.set_user("7", ["buyer", "seller", "buyer"])

        assert session.user_id() == "7"
        assert session.roles() == ["buyer", "seller"]
        assert session.is_authenticated()

    def test_unauthenticated_by_default(self, store):
        session = make_session(store)
        assert session.user_id() is None
        assert session.roles() == []
        assert not session.is_authenticated()


class TestSessionPersistence:

    @pytest.mark.asyncio
    async def test_save_writes_payload_with_expiry(self, store):
        session = make_session(store)
        session.put("cart", [3])

        assert await session.save() is True

        record = await store.find(session.get_id())
        assert record.data["cart"] == [3]
        assert record.expire_at > 0
        assert not session.is_dirty()

    @pytest.mark.asyncio
    async def test_save_skips_clean_session(self):
        store = LaggyStore()
        session = make_session(store)

        assert await session.save() is True
        assert store.count("upsert") == 0

    @pytest.mark.asyncio
    async def test_save_wraps_store_exception(self):
        store = LaggyStore(upsert_error=ConnectionError("down"))
        session = make_session(store)
        session.put("a", 1)

        with pytest.raises(SessionStoreError) as exc_info:
            await session.save()

        assert exc_info.value.session_id == "initial-session-id"
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert session.is_dirty()

    @pytest.mark.asyncio
    async def test_regenerate_destroys_old_record(self, store):
        await store.upsert("initial-session-id", {"user_id": "1"})
        session = make_session(store)
        await session.start()

        new_id = await session.regenerate()

        assert new_id != "initial-session-id"
        assert session.get_id() == new_id
        assert session.all() == {}
        assert session.is_dirty()
        assert await store.find("initial-session-id") is None

    @pytest.mark.asyncio
    async def test_regenerate_failure_keeps_old_id(self):
        store = LaggyStore(destroy_error=ConnectionError("down"))
        session = make_session(store)

        with pytest.raises(SessionStoreError):
            await session.regenerate()

        assert session.get_id() == "initial-session-id"

    @pytest.mark.asyncio
    async def test_invalidate_flushes_and_regenerates(self, store):
        session = make_session(store)
        session.set_user("1", ["buyer"])
        await session.save()
        old_id = session.get_id()

        await session.invalidate()

        assert session.get_id() != old_id
        assert not session.is_authenticated()
        assert await store.find(old_id) is None
