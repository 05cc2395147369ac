"""
FieldNormalizer: sanitize identity text and build control fingerprints.
"""

import html
import re

from form_filler.controls import Control
from form_filler.document import FormDocument
from form_filler.options import FillOptions

_SCRIPT_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>?")
_WHITESPACE_RE = re.compile(r"\s+")


class FieldNormalizer:
    """
    Builds the text that custom field rules and ignore patterns are matched
    against. Case is preserved; all matching is case-insensitive.
    """

    def sanitize_text(self, text) -> str:
        """
        Strip script/style blocks and tags, decode entities, collapse whitespace.

        Args:
            text: Raw attribute value or label HTML (None is allowed)

        Returns:
            Sanitized single-line text
        """
        if not text:
            return ""
        if not isinstance(text, str):
            text = str(text)

        cleaned = _SCRIPT_RE.sub(" ", text)
        cleaned = _TAG_RE.sub(" ", cleaned)
        cleaned = html.unescape(cleaned)
        cleaned = _WHITESPACE_RE.sub(" ", cleaned)
        return cleaned.strip()

    def fingerprint(self, control: Control, options: FillOptions, document: FormDocument) -> str:
        """
        Concatenate the enabled identity segments of a control.

        Each segment is sanitized and prefixed with a single space, so the
        result for the same control, options and labels is always identical.
        """
        settings = options.field_match_settings
        parts = []

        if settings.match_name:
            parts.append(self.sanitize_text(control.name))

        if settings.match_id:
            parts.append(self.sanitize_text(control.dom_id))

        if settings.match_class:
            parts.append(self.sanitize_text(control.css_classes))

        if settings.match_placeholder:
            parts.append(self.sanitize_text(control.placeholder))

        if settings.match_label and control.dom_id:
            for label_html in document.labels_for(control.dom_id):
                parts.append(self.sanitize_text(label_html))

        if settings.match_aria_label:
            parts.append(self.sanitize_text(control.aria_label))

        if settings.match_aria_labelledby:
            for label_id in control.aria_labelledby_ids:
                label_html = document.element_text(label_id)
                if label_html is not None:
                    parts.append(self.sanitize_text(label_html))

        return "".join(f" {part}" for part in parts)
