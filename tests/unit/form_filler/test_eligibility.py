"""Unit tests for should_skip."""

import pytest

from form_filler.controls import Control, ControlKind
from form_filler.document import InMemoryFormDocument
from form_filler.eligibility import should_skip
from form_filler.options import FillOptions


STRUCTURAL = ["button", "submit", "reset", "file", "hidden", "image"]


class TestStructuralKinds:
    @pytest.mark.parametrize("kind", STRUCTURAL)
    @pytest.mark.parametrize(
        "options",
        [
            FillOptions(),
            FillOptions(ignore_hidden_fields=False, ignored_fields=[], ignore_fields_with_content=False),
            FillOptions(ignore_fields_with_content=True),
        ],
    )
    def test_always_skipped(self, kind, options):
        control = Control(kind=ControlKind.parse(kind), name="anything")
        assert should_skip(control, options, InMemoryFormDocument([control]))


class TestVisibility:
    @pytest.mark.parametrize(
        "width, height, visibility, expected_skip",
        [
            (0, 0, "visible", True),
            (0, 0, "hidden", True),
            (100, 20, "hidden", True),
            (100, 0, "visible", False),
            (0, 20, "visible", False),
            (100, 20, "visible", False),
        ],
    )
    def test_hidden_controls(self, width, height, visibility, expected_skip):
        control = Control(kind=ControlKind.TEXT, width=width, height=height, visibility=visibility)
        assert should_skip(control, FillOptions(), InMemoryFormDocument([control])) is expected_skip

    def test_hidden_controls_filled_when_option_off(self):
        control = Control(kind=ControlKind.TEXT, width=0, height=0)
        options = FillOptions(ignore_hidden_fields=False)
        assert not should_skip(control, options, InMemoryFormDocument([control]))


class TestIgnoredFields:
    def test_matches_fingerprint_not_only_name(self):
        control = Control(kind=ControlKind.TEXT, name="field_7", dom_id="g-recaptcha-response")
        assert should_skip(control, FillOptions(), InMemoryFormDocument([control]))

    def test_matches_label_text(self):
        control = Control(kind=ControlKind.TEXT, name="q", dom_id="q1")
        document = InMemoryFormDocument([control], labels={"q1": ["Type the CAPTCHA"]})
        assert should_skip(control, FillOptions(), document)

    def test_not_ignored(self):
        control = Control(kind=ControlKind.TEXT, name="city")
        assert not should_skip(control, FillOptions(), InMemoryFormDocument([control]))


class TestFieldsWithContent:
    @pytest.fixture
    def options(self) -> FillOptions:
        return FillOptions(ignore_fields_with_content=True)

    def test_text_with_value_skipped(self, options):
        control = Control(kind=ControlKind.TEXT, name="city", value=" Paris ")
        assert should_skip(control, options, InMemoryFormDocument([control]))

    def test_whitespace_value_not_skipped(self, options):
        control = Control(kind=ControlKind.TEXT, name="city", value="   ")
        assert not should_skip(control, options, InMemoryFormDocument([control]))

    def test_checked_checkbox_not_skipped(self, options):
        control = Control(kind=ControlKind.CHECKBOX, name="news", value="on", checked=True)
        assert not should_skip(control, options, InMemoryFormDocument([control]))

    def test_radio_skipped_when_group_has_checked_sibling(self, options):
        first = Control(kind=ControlKind.RADIO, name="plan", value="a")
        second = Control(kind=ControlKind.RADIO, name="plan", value="b", checked=True)
        assert should_skip(first, options, InMemoryFormDocument([first, second]))

    def test_radio_with_value_attribute_not_skipped(self, options):
        first = Control(kind=ControlKind.RADIO, name="plan", value="a")
        other_group = Control(kind=ControlKind.RADIO, name="size", value="xl", checked=True)
        assert not should_skip(first, options, InMemoryFormDocument([first, other_group]))

    def test_content_ignored_when_option_off(self):
        control = Control(kind=ControlKind.TEXT, name="city", value="Paris")
        assert not should_skip(control, FillOptions(), InMemoryFormDocument([control]))


def test_should_skip_is_idempotent():
    control = Control(kind=ControlKind.TEXT, name="city", value="Paris")
    options = FillOptions(ignore_fields_with_content=True)
    document = InMemoryFormDocument([control])
    assert should_skip(control, options, document) == should_skip(control, options, document)
