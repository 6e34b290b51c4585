"""Tests for the account controller."""

import pytest

from client.card_form import CardDraft
from client.errors import AuthError, StoreError, ValidationError
from conftest import settle
from storage.repository import account as account_repo
from storage.repository import document as document_repo


class CountingAuth:
    """Wraps an auth provider and counts sign-up calls."""

    def __init__(self, inner):
        self.inner = inner
        self.sign_up_calls = 0

    def __getattr__(self, name):
        return getattr(self.inner, name)

    async def sign_up(self, email, password):
        self.sign_up_calls += 1
        return await self.inner.sign_up(email, password)


class TestSignIn:
    @pytest.mark.parametrize("email,password", [("", "secret1"), ("ada@example.com", ""), ("", "")])
    async def test_empty_fields(self, app, email, password) -> None:
        with pytest.raises(AuthError, match="Please fill in all fields"):
            await app.account.sign_in(email, password)

    async def test_bad_credentials(self, signed_in_app) -> None:
        await signed_in_app.account.sign_out()

        with pytest.raises(AuthError, match="Invalid email or password"):
            await signed_in_app.account.sign_in("ada@example.com", "nope-nope")

    async def test_session_follows_sign_in(self, signed_in_app) -> None:
        await signed_in_app.account.sign_out()
        await settle()
        assert signed_in_app.session.identity is None

        await signed_in_app.account.sign_in("ada@example.com", "secret1")
        assert signed_in_app.session.identity is None
        await settle()

        assert signed_in_app.session.identity.email == "ada@example.com"


class TestSignUp:
    @pytest.fixture
    def counting(self, app, auth):
        counting = CountingAuth(auth)
        app.account._auth = counting
        return counting

    @pytest.mark.parametrize("fields,message", [
        (("", "secret1", "secret1", "Ada", "Lovelace"), "All fields are required"),
        (("ada@example.com", "secret1", "secret1", "", "Lovelace"), "All fields are required"),
        (("ada@example.com", "secret1", "secret2", "Ada", "Lovelace"), "Passwords do not match"),
        (("ada@example.com", "abc", "abcd", "Ada", "Lovelace"), "Passwords do not match"),
        (("ada@example.com", "abc", "abc", "Ada", "Lovelace"), "Password must be at least 6 characters"),
        (("not-an-email", "abc", "abc", "Ada", "Lovelace"), "Password must be at least 6 characters"),
        (("not-an-email", "secret1", "secret1", "Ada", "Lovelace"), "Please enter a valid email address"),
        (("ada@example", "secret1", "secret1", "Ada", "Lovelace"), "Please enter a valid email address"),
    ])
    async def test_rules_apply_in_order(self, app, counting, fields, message) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await app.account.sign_up(*fields)

        assert exc_info.value.message == message
        assert counting.sign_up_calls == 0

    async def test_success_sets_display_name_and_profile(self, app, counting, store) -> None:
        identity = await app.account.sign_up("ada@example.com", "secret1", "secret1", "Ada", "Lovelace")

        assert counting.sign_up_calls == 1
        assert identity.display_name == "Ada Lovelace"
        profile = document_repo.get_document("users", identity.uid)
        assert profile["first_name"] == "Ada"
        assert profile["last_name"] == "Lovelace"
        assert profile["email"] == "ada@example.com"
        assert profile["created_at"]

        await settle()
        assert app.session.identity.display_name == "Ada Lovelace"

    async def test_provider_rejection_is_surfaced(self, signed_in_app) -> None:
        await signed_in_app.account.sign_out()

        with pytest.raises(AuthError, match="Email already in use"):
            await signed_in_app.account.sign_up("ada@example.com", "secret1", "secret1", "Ada", "L")


class TestDeleteAccount:
    async def _add_cards(self, app, count: int):
        ids = []
        for i in range(count):
            ids.append(await app.card_form.save(CardDraft(title=f"card {i}", tasks="t")))
        await settle()
        return ids

    async def test_deletes_cards_profile_then_identity(self, signed_in_app, store) -> None:
        uid = signed_in_app.session.identity.uid
        await self._add_cards(signed_in_app, 3)
        store.calls.clear()

        await signed_in_app.account.delete_account()
        await settle()

        deletes = store.calls_for("delete")
        assert [c[1] for c in deletes] == ["flashcards"] * 3 + ["users"]
        assert document_repo.list_documents("flashcards", {"owner_id": uid}) == []
        assert document_repo.get_document("users", uid) is None
        assert account_repo.get_account(uid) is None
        assert signed_in_app.session.identity is None
        assert signed_in_app.cards.cards == ()

    async def test_only_own_cards_are_deleted(self, signed_in_app, store) -> None:
        await store.create("flashcards", {"title": "x", "tasks": "y", "status": "incomplete", "owner_id": "someone"})
        await self._add_cards(signed_in_app, 1)

        await signed_in_app.account.delete_account()

        assert len(document_repo.list_documents("flashcards", {"owner_id": "someone"})) == 1

    async def test_failed_card_deletion_stops_saga(self, signed_in_app, store) -> None:
        uid = signed_in_app.session.identity.uid
        ids = await self._add_cards(signed_in_app, 3)
        store.fail_delete_ids.add(ids[1])
        store.calls.clear()

        with pytest.raises(StoreError):
            await signed_in_app.account.delete_account()

        deleted = [c for c in store.calls_for("delete")]
        assert all(c[1] == "flashcards" for c in deleted)
        remaining = [d["id"] for d in document_repo.list_documents("flashcards", {"owner_id": uid})]
        assert remaining == [ids[1]]
        assert document_repo.get_document("users", uid) is not None
        assert account_repo.get_account(uid) is not None

        # a retry picks up the remaining card and finishes
        store.fail_delete_ids.clear()
        await signed_in_app.account.delete_account()

        assert document_repo.list_documents("flashcards", {"owner_id": uid}) == []
        assert account_repo.get_account(uid) is None

    async def test_no_identity_is_noop(self, app, store) -> None:
        assert await app.account.delete_account() is None
        assert store.calls == []


class TestLoadProfile:
    async def test_reads_profile_written_at_sign_up(self, signed_in_app) -> None:
        profile = await signed_in_app.account.load_profile()

        assert profile.uid == signed_in_app.session.identity.uid
        assert (profile.first_name, profile.last_name) == ("Ada", "Lovelace")
        assert profile.email == "ada@example.com"
        assert profile.created_at

    async def test_missing_profile_record(self, signed_in_app) -> None:
        document_repo.delete_document("users", signed_in_app.session.identity.uid)

        assert await signed_in_app.account.load_profile() is None

    async def test_signed_out(self, app) -> None:
        assert await app.account.load_profile() is None
