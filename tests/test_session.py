"""Tests for the form session (event interface and snapshots)."""

import logging

import pytest

from formguard.focus import Committed
from formguard.metadata.loader import DEFAULT_SUCCESS_MESSAGE, FormDefinition
from formguard.session import MASK, FormSession
from formguard.validation.types import FieldId, FormConfigError
from formguard.visibility import Variant


@pytest.fixture
def session():
    return FormSession()


def fill(session: FormSession, username="alice", email="alice@example.com",
         password="Abc12345", repeat="Abc12345") -> None:
    session.on_text_changed(FieldId.USERNAME, username)
    session.on_text_changed(FieldId.EMAIL, email)
    session.on_text_changed(FieldId.PASSWORD, password)
    session.on_text_changed(FieldId.PASSWORD_REPEAT, repeat)


# =============================================================================
# Construction
# =============================================================================


class TestConstruction:
    def test_default_variant_is_per_field(self, session):
        assert session.variant is Variant.PER_FIELD

    def test_unknown_variant_fails_fast(self):
        with pytest.raises(FormConfigError):
            FormSession(variant="sometimes")

    def test_initial_snapshot(self, session):
        snap = session.get_snapshot()
        assert dict(snap.values) == {f: "" for f in FieldId}
        assert snap.focus is None
        assert snap.form_valid is False
        assert dict(snap.visible_messages) == {}

    def test_sessions_are_isolated(self):
        first = FormSession()
        second = FormSession()

        fill(first)
        first.on_focus_changed(FieldId.EMAIL)

        assert first.is_form_valid() is True
        assert second.is_form_valid() is False
        assert second.get_snapshot().focus is None
        assert second.get_snapshot().values[FieldId.USERNAME] == ""


# =============================================================================
# Events
# =============================================================================


class TestEvents:
    def test_text_change_is_visible_immediately(self, session):
        session.on_text_changed("username", "alice")
        snap = session.get_snapshot()
        assert snap.values[FieldId.USERNAME] == "alice"
        assert snap.validity[FieldId.USERNAME] is True

    def test_focus_advances_on_commit(self, session):
        session.on_focus_changed(FieldId.USERNAME)

        focuses = []
        for _ in range(4):
            session.on_commit()
            focuses.append(session.get_snapshot().focus)

        assert focuses == [FieldId.EMAIL, FieldId.PASSWORD, FieldId.PASSWORD_REPEAT, None]

    def test_commit_returns_event(self, session):
        session.on_focus_changed(FieldId.EMAIL)
        assert session.on_commit() == Committed(FieldId.EMAIL)

    def test_commit_while_unfocused_is_noop(self, session):
        before = session.get_snapshot()
        assert session.on_commit() is None
        assert session.on_commit() is None
        assert session.get_snapshot() == before

    def test_snapshot_values_do_not_change_after_read(self, session):
        snap = session.get_snapshot()
        session.on_text_changed(FieldId.USERNAME, "alice")
        assert snap.values[FieldId.USERNAME] == ""


# =============================================================================
# Visibility through the session
# =============================================================================


class TestVisibility:
    def test_per_field_email_round_trip(self, session):
        session.on_focus_changed(FieldId.EMAIL)
        session.on_text_changed(FieldId.EMAIL, "bad")
        session.on_commit()
        assert session.get_snapshot().visibility[FieldId.EMAIL] is True

        session.on_focus_changed(FieldId.EMAIL)
        session.on_text_changed(FieldId.EMAIL, "good@x.com")
        session.on_commit()
        assert session.get_snapshot().visibility[FieldId.EMAIL] is False

    def test_always_shows_errors_without_commit(self):
        session = FormSession(variant="always")
        session.on_text_changed(FieldId.EMAIL, "bad")
        messages = session.get_snapshot().visible_messages
        assert messages[FieldId.EMAIL] == "Invalid email"
        assert FieldId.PASSWORD_REPEAT not in messages

    def test_focus_keyed_needs_focus_back_on_field(self):
        session = FormSession(variant=Variant.FOCUS_KEYED)
        session.on_focus_changed(FieldId.USERNAME)
        session.on_text_changed(FieldId.USERNAME, "bob")
        session.on_commit()
        assert session.get_snapshot().visibility.visible_fields() == []

        session.on_focus_changed(FieldId.USERNAME)
        assert session.get_snapshot().visible_messages == {
            FieldId.USERNAME: "Invalid username"
        }

    def test_reset_clears_everything(self, session):
        session.on_focus_changed(FieldId.USERNAME)
        session.on_text_changed(FieldId.USERNAME, "bob")
        session.on_commit()

        session.reset()

        snap = session.get_snapshot()
        assert dict(snap.values) == {f: "" for f in FieldId}
        assert snap.focus is None
        assert snap.visibility.visible_fields() == []


# =============================================================================
# Submit
# =============================================================================


class TestSubmit:
    def test_valid_form_submits(self, session):
        fill(session)
        result = session.on_submit_form()
        assert result.valid is True
        assert result.errors == []
        assert result.message == DEFAULT_SUCCESS_MESSAGE

    def test_only_username_fails(self, session):
        fill(session, username="abcd", email="x@y.com", password="Abcd1234", repeat="Abcd1234")

        assert session.get_snapshot().form_valid is False
        result = session.on_submit_form()

        assert result.valid is False
        assert result.invalid_fields == [FieldId.USERNAME]
        assert result.errors[0].code == "INVALID_USERNAME"

    def test_empty_form_reports_three_fields(self, session):
        result = session.on_submit_form()
        assert result.invalid_fields == [FieldId.USERNAME, FieldId.EMAIL, FieldId.PASSWORD]

    def test_submit_does_not_change_state(self, session):
        fill(session, email="bad")
        before = session.get_snapshot()
        session.on_submit_form()
        assert session.get_snapshot() == before

    def test_result_to_dict(self, session):
        fill(session, repeat="nope")
        assert session.on_submit_form().to_dict() == {
            "valid": False,
            "errors": [
                {
                    "message": "Passwords don't match",
                    "code": "PASSWORD_MISMATCH",
                    "field": "passwordRepeat",
                }
            ],
        }

    def test_custom_messages_are_reported(self):
        definition = FormDefinition.from_dict(
            {"form": {"successMessage": "Welcome!", "fields": {"email": {"message": "Check your email"}}}}
        )
        session = FormSession(definition=definition)
        fill(session, email="nope")
        assert session.on_submit_form().errors[0].message == "Check your email"

        session.on_text_changed(FieldId.EMAIL, "a@b.co")
        assert session.on_submit_form().message == "Welcome!"

    def test_rejection_is_logged(self, session, caplog):
        caplog.set_level(logging.INFO, logger="formguard.session")
        session.on_submit_form()
        assert "Form submit rejected" in caplog.text
        assert "username, email, password" in caplog.text


# =============================================================================
# Serialization
# =============================================================================


class TestSnapshotDict:
    def test_secure_values_are_masked(self, session):
        fill(session, username="alice", password="Abc12345", repeat="Abc1")
        data = session.snapshot_dict()

        assert data["values"] == {
            "username": "alice",
            "email": "alice@example.com",
            "password": MASK * 8,
            "passwordRepeat": MASK * 4,
        }

    def test_shape(self, session):
        session.on_focus_changed(FieldId.USERNAME)
        session.on_commit()
        data = session.snapshot_dict()

        assert data["focus"] == "email"
        assert data["formValid"] is False
        assert data["validity"]["username"] is False
        assert data["visibleMessages"] == {
            "username": "Username must be at least 5 characters"
        }
