"""Tests for the SQL auth provider."""

import json

import pytest

from conftest import settle
from storage.errors import AuthError
from storage.service.auth import SqlAuthProvider


class TestRegistrationAndSignIn:
    async def test_sign_up_signs_in(self, auth) -> None:
        identity = await auth.sign_up("ada@example.com", "secret1")

        assert auth.current_user == identity
        assert identity.email == "ada@example.com"
        assert identity.display_name is None

    async def test_duplicate_email_rejected(self, auth) -> None:
        await auth.sign_up("ada@example.com", "secret1")

        with pytest.raises(AuthError, match="Email already in use"):
            await auth.sign_up("ada@example.com", "secret2")

    async def test_weak_password_rejected(self, auth) -> None:
        with pytest.raises(AuthError):
            await auth.sign_up("ada@example.com", "abc")

    async def test_sign_in_with_wrong_password(self, auth) -> None:
        await auth.sign_up("ada@example.com", "secret1")
        await auth.sign_out()

        with pytest.raises(AuthError, match="Invalid email or password"):
            await auth.sign_in("ada@example.com", "wrong-password")
        assert auth.current_user is None

    async def test_sign_in_unknown_account(self, auth) -> None:
        with pytest.raises(AuthError, match="Invalid email or password"):
            await auth.sign_in("nobody@example.com", "secret1")

    async def test_sign_in_returns_stored_identity(self, auth) -> None:
        created = await auth.sign_up("ada@example.com", "secret1")
        await auth.update_display_name(created, "Ada Lovelace")
        await auth.sign_out()

        identity = await auth.sign_in("ada@example.com", "secret1")

        assert identity.uid == created.uid
        assert identity.display_name == "Ada Lovelace"


class TestNotifications:
    async def test_subscribe_delivers_current_state_first(self, auth) -> None:
        seen = []
        auth.subscribe(seen.append)
        await settle()

        assert seen == [None]

    async def test_each_change_is_delivered(self, auth) -> None:
        seen = []
        auth.subscribe(seen.append)
        await settle()

        identity = await auth.sign_up("ada@example.com", "secret1")
        await settle()
        await auth.sign_out()
        await settle()

        assert seen == [None, identity, None]

    async def test_unsubscribe(self, auth) -> None:
        seen = []
        unsubscribe = auth.subscribe(seen.append)
        await settle()
        unsubscribe()

        await auth.sign_up("ada@example.com", "secret1")
        await settle()

        assert seen == [None]

    async def test_delete_account_clears_session(self, auth) -> None:
        identity = await auth.sign_up("ada@example.com", "secret1")

        await auth.delete_account(identity)

        assert auth.current_user is None
        with pytest.raises(AuthError):
            await auth.sign_in("ada@example.com", "secret1")


class TestSessionFile:
    async def test_session_survives_a_new_provider(self, db, tmp_path) -> None:
        session_file = str(tmp_path / "auth.json")
        first = SqlAuthProvider(session_file=session_file)
        identity = await first.sign_up("ada@example.com", "secret1")

        with open(session_file) as f:
            assert json.load(f)["uid"] == identity.uid

        second = SqlAuthProvider(session_file=session_file)
        assert second.current_user == identity

    async def test_sign_out_removes_session_file(self, db, tmp_path) -> None:
        session_file = tmp_path / "auth.json"
        provider = SqlAuthProvider(session_file=str(session_file))
        await provider.sign_up("ada@example.com", "secret1")

        await provider.sign_out()

        assert not session_file.exists()

    async def test_stale_session_file_is_discarded(self, db, tmp_path) -> None:
        session_file = tmp_path / "auth.json"
        session_file.write_text(json.dumps({"uid": "gone", "email": "gone@example.com"}))

        provider = SqlAuthProvider(session_file=str(session_file))

        assert provider.current_user is None
        assert not session_file.exists()

    @pytest.mark.parametrize("content", ["{not json", "", "[1, 2]", json.dumps({"email": "ada@example.com"})])
    async def test_unreadable_session_file_is_discarded(self, db, tmp_path, content) -> None:
        session_file = tmp_path / "auth.json"
        session_file.write_text(content)

        provider = SqlAuthProvider(session_file=str(session_file))

        assert provider.current_user is None
        assert not session_file.exists()

    async def test_reload_follows_sign_out_elsewhere(self, db, tmp_path) -> None:
        session_file = str(tmp_path / "auth.json")
        other = SqlAuthProvider(session_file=session_file)
        await other.sign_up("ada@example.com", "secret1")
        provider = SqlAuthProvider(session_file=session_file)
        seen = []
        provider.subscribe(seen.append)
        await settle()

        await other.sign_out()
        provider.reload_session()
        await settle()

        assert provider.current_user is None
        assert seen[-1] is None

    async def test_reload_keeps_session_on_half_written_file(self, db, tmp_path) -> None:
        session_file = tmp_path / "auth.json"
        provider = SqlAuthProvider(session_file=str(session_file))
        identity = await provider.sign_up("ada@example.com", "secret1")
        session_file.write_text('{"uid": ')

        provider.reload_session()

        assert provider.current_user == identity
        assert session_file.exists()
