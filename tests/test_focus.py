"""Tests for the focus controller."""

import pytest

from formguard.focus import FOCUS_ORDER, Committed, FocusController, next_field
from formguard.validation.types import FieldId, FormConfigError


@pytest.fixture
def controller():
    return FocusController()


class TestFocusOrder:
    def test_order_follows_field_declaration(self):
        assert FOCUS_ORDER == (
            FieldId.USERNAME,
            FieldId.EMAIL,
            FieldId.PASSWORD,
            FieldId.PASSWORD_REPEAT,
        )

    def test_next_field(self):
        assert next_field(FieldId.USERNAME) is FieldId.EMAIL
        assert next_field(FieldId.PASSWORD) is FieldId.PASSWORD_REPEAT
        assert next_field(FieldId.PASSWORD_REPEAT) is None


class TestFocusController:
    def test_starts_unfocused(self, controller):
        assert controller.focus is None
        assert controller.is_focused is False

    def test_focus_on_field(self, controller):
        controller.focus_on(FieldId.PASSWORD)
        assert controller.focus is FieldId.PASSWORD

    def test_focus_on_string_id(self, controller):
        controller.focus_on("email")
        assert controller.focus is FieldId.EMAIL

    def test_focus_on_unknown_field_raises(self, controller):
        with pytest.raises(FormConfigError):
            controller.focus_on("phone")

    def test_focus_none_blurs(self, controller):
        controller.focus_on(FieldId.EMAIL)
        controller.focus_on(None)
        assert controller.focus is None

    def test_commit_walks_every_field(self, controller):
        controller.focus_on(FieldId.USERNAME)

        seen = []
        events = []
        for _ in range(4):
            events.append(controller.commit())
            seen.append(controller.focus)

        assert seen == [FieldId.EMAIL, FieldId.PASSWORD, FieldId.PASSWORD_REPEAT, None]
        assert events == [
            Committed(FieldId.USERNAME),
            Committed(FieldId.EMAIL),
            Committed(FieldId.PASSWORD),
            Committed(FieldId.PASSWORD_REPEAT),
        ]

    def test_commit_from_middle(self, controller):
        controller.focus_on(FieldId.PASSWORD)
        assert controller.commit() == Committed(FieldId.PASSWORD)
        assert controller.focus is FieldId.PASSWORD_REPEAT

    def test_commit_while_unfocused_is_noop(self, controller):
        assert controller.commit() is None
        assert controller.commit() is None
        assert controller.focus is None

    def test_commit_after_last_field_stays_unfocused(self, controller):
        controller.focus_on(FieldId.PASSWORD_REPEAT)
        controller.commit()
        assert controller.commit() is None
        assert controller.focus is None

    def test_reset(self, controller):
        controller.focus_on(FieldId.EMAIL)
        controller.reset()
        assert controller.focus is None
