"""Unit tests for PageFormDocument against a mocked Playwright page."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from form_filler.controls import ControlKind
from form_filler.page_document import (
    COMMIT_SCRIPT,
    DISPATCH_SCRIPT,
    KEY_ATTRIBUTE,
    PageFormDocument,
    control_from_snapshot,
)

SNAPSHOT = [
    {
        "key": "0",
        "kind": "email",
        "name": "email",
        "dom_id": "email-1",
        "css_classes": "form-control",
        "placeholder": "you@example.com",
        "aria_label": "",
        "aria_labelledby_ids": ["hint"],
        "min_bound": None,
        "max_bound": None,
        "max_length": 64,
        "value": "",
        "checked": False,
        "disabled": False,
        "options": [],
        "content_editable": False,
        "text_content": "",
        "width": 200,
        "height": 24,
        "visibility": "visible",
        "labels": ["E-mail"],
        "labelled_texts": {"hint": "We never share it"},
    },
    {
        "key": "1",
        "kind": "select-one",
        "name": "country",
        "dom_id": "",
        "options": [
            {"value": "", "label": "Choose", "selected": True, "disabled": False},
            {"value": "uk", "label": "United Kingdom", "selected": False, "disabled": False},
        ],
        "labels": [],
        "labelled_texts": {},
    },
    {"key": "2", "kind": "weird-widget", "name": "misc"},
]


@pytest.fixture
def page() -> MagicMock:
    page = MagicMock()
    page.url = "https://example.com/signup"
    page.evaluate = AsyncMock(return_value=SNAPSHOT)
    return page


class TestLoad:
    @pytest.mark.asyncio
    async def test_load_builds_controls_and_lookups(self, page):
        document = await PageFormDocument.load(page)

        controls = document.controls()
        assert [c.kind for c in controls] == [ControlKind.EMAIL, ControlKind.SELECT_ONE, ControlKind.TEXT]
        assert controls[0].max_length == 64
        assert controls[1].options[1].label == "United Kingdom"
        assert document.labels_for("email-1") == ["E-mail"]
        assert document.labels_for("unknown") == []
        assert document.element_text("hint") == "We never share it"
        assert document.element_text("missing") is None

    @pytest.mark.asyncio
    async def test_empty_page(self, page):
        page.evaluate.return_value = []
        document = await PageFormDocument.load(page)
        assert document.controls() == []


class TestWrites:
    @pytest.mark.asyncio
    async def test_commit_sends_value_state(self, page):
        document = await PageFormDocument.load(page)
        page.evaluate.return_value = True
        email = document.controls()[0]
        email.value = "qa@example.com"

        await document.commit(email)

        script, (attr, key, state) = page.evaluate.call_args.args
        assert script == COMMIT_SCRIPT
        assert attr == KEY_ATTRIBUTE
        assert key == "0"
        assert state["value"] == "qa@example.com"
        assert state["selected"] is None

    @pytest.mark.asyncio
    async def test_commit_sends_select_state(self, page):
        document = await PageFormDocument.load(page)
        page.evaluate.return_value = True
        country = document.controls()[1]
        country.select_option(1)

        await document.commit(country)

        state = page.evaluate.call_args.args[1][2]
        assert state["selected"] == [False, True]

    @pytest.mark.asyncio
    async def test_commit_warns_when_element_is_gone(self, page, caplog):
        document = await PageFormDocument.load(page)
        page.evaluate.return_value = False

        await document.commit(document.controls()[0])
        assert "no longer on the page" in caplog.text

    @pytest.mark.asyncio
    async def test_dispatch_events(self, page):
        document = await PageFormDocument.load(page)
        page.evaluate.return_value = True

        await document.dispatch_events(document.controls()[0], ("input", "change"))

        page.evaluate.assert_awaited_with(DISPATCH_SCRIPT, [KEY_ATTRIBUTE, "0", ["input", "change"]])


def test_control_from_snapshot_ignores_extra_keys():
    control = control_from_snapshot({"kind": "CHECKBOX", "name": "news", "checked": True, "labels": ["x"]})
    assert control.kind == ControlKind.CHECKBOX
    assert control.checked
