"""Unit tests for the FieldNormalizer class."""

import pytest

from form_filler.controls import Control, ControlKind
from form_filler.document import InMemoryFormDocument
from form_filler.normalizer import FieldNormalizer
from form_filler.options import FieldMatchSettings, FillOptions


@pytest.fixture
def normalizer() -> FieldNormalizer:
    return FieldNormalizer()


class TestSanitizeText:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("  Email   address ", "Email address"),
            ("<b>First</b> name", "First name"),
            ("Name<script>alert('x')</script>", "Name"),
            ("<style>.a{}</style>Phone", "Phone"),
            ("Terms &amp; conditions", "Terms & conditions"),
            ("\t line \n break ", "line break"),
            ("", ""),
        ],
    )
    def test_sanitize_text(self, normalizer: FieldNormalizer, raw: str, expected: str):
        assert normalizer.sanitize_text(raw) == expected

    def test_none_and_non_string(self, normalizer: FieldNormalizer):
        assert normalizer.sanitize_text(None) == ""
        assert normalizer.sanitize_text(42) == "42"


class TestFingerprint:
    def _control(self) -> Control:
        return Control(
            kind=ControlKind.TEXT,
            name="user_email",
            dom_id="email-1",
            css_classes="form-control  wide",
            placeholder="you@example.com",
            aria_label="Work email",
            aria_labelledby_ids=["hint", "missing"],
        )

    def _document(self) -> InMemoryFormDocument:
        return InMemoryFormDocument(
            labels={"email-1": ["<span>E-mail</span> address"]},
            elements={"hint": "We never <i>share</i> it"},
        )

    def test_all_segments_in_order(self, normalizer: FieldNormalizer):
        fingerprint = normalizer.fingerprint(self._control(), FillOptions(), self._document())
        assert fingerprint == (
            " user_email email-1 form-control wide you@example.com"
            " E-mail address Work email We never share it"
        )

    def test_toggles_drop_segments(self, normalizer: FieldNormalizer):
        options = FillOptions(
            field_match_settings=FieldMatchSettings(
                match_id=False,
                match_class=False,
                match_placeholder=False,
                match_label=False,
                match_aria_labelledby=False,
            )
        )
        fingerprint = normalizer.fingerprint(self._control(), options, self._document())
        assert fingerprint == " user_email Work email"

    def test_missing_attributes_give_empty_segments(self, normalizer: FieldNormalizer):
        control = Control(kind=ControlKind.TEXT)
        fingerprint = normalizer.fingerprint(control, FillOptions(), InMemoryFormDocument())
        assert fingerprint.strip() == ""

    def test_fingerprint_is_stable(self, normalizer: FieldNormalizer):
        control = self._control()
        document = self._document()
        first = normalizer.fingerprint(control, FillOptions(), document)
        normalizer.fingerprint(Control(kind=ControlKind.EMAIL, name="other"), FillOptions(), document)
        assert normalizer.fingerprint(control, FillOptions(), document) == first
