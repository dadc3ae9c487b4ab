"""Tests for CSRF derivation, cookie signing and password hashing."""

import pytest

from storefront.support import Crypto


class TestCsrfTokens:

    def test_token_is_deterministic_per_session(self):
        assert Crypto.generate_csrf_token("sid-1", "secret") == Crypto.generate_csrf_token("sid-1", "secret")

    def test_token_differs_per_session_and_secret(self):
        token = Crypto.generate_csrf_token("sid-1", "secret")
        assert token != Crypto.generate_csrf_token("sid-2", "secret")
        assert token != Crypto.generate_csrf_token("sid-1", "other")

    def test_verify(self):
        token = Crypto.generate_csrf_token("sid-1", "secret")
        assert Crypto.verify_csrf_token(token, "sid-1", "secret")
        assert not Crypto.verify_csrf_token(token, "sid-2", "secret")
        assert not Crypto.verify_csrf_token("", "sid-1", "secret")
        assert not Crypto.verify_csrf_token(token, None, "secret")

    def test_non_ascii_token_is_rejected(self):
        assert not Crypto.verify_csrf_token("\u00e9" * 64, "sid-1", "secret")
        assert not Crypto.verify_csrf_token("caf\u00e9", "sid-1", "secret")


class TestSignedData:

    def test_round_trip(self):
        signed = Crypto.sign_data("sid-1", "secret")
        assert signed != "sid-1"
        assert Crypto.verify_signed_data(signed, "secret") == "sid-1"

    def test_tampered_or_wrong_secret(self):
        signed = Crypto.sign_data("sid-1", "secret")
        assert Crypto.verify_signed_data(signed + "x", "secret") is None
        assert Crypto.verify_signed_data(signed, "other") is None
        assert Crypto.verify_signed_data("plain-session-id", "secret") is None


class TestPasswords:

    @pytest.mark.asyncio
    async def test_verify_async(self):
        hashed = Crypto.hash_password("hunter22", rounds=4)

        assert await Crypto.verify_password_async("hunter22", hashed)
        assert not await Crypto.verify_password_async("wrong", hashed)

    def test_invalid_hash_is_false(self):
        assert not Crypto.verify_password("x", "not-a-bcrypt-hash")


class TestIds:

    def test_generate_id_length(self):
        assert len(Crypto.generate_id(10)) == 10
        assert Crypto.generate_id() != Crypto.generate_id()
