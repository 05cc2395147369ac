import logging
from typing import Optional

from form_filler.controls import STRUCTURAL_KINDS, Control, ControlKind
from form_filler.document import FormDocument
from form_filler.normalizer import FieldNormalizer
from form_filler.options import FillOptions
from form_filler.rule_resolver import is_any_match

logger = logging.getLogger(__name__)


def should_skip(
    control: Control,
    options: FillOptions,
    document: FormDocument,
    normalizer: Optional[FieldNormalizer] = None,
) -> bool:
    """
    Decide whether the filler must leave a control alone.

    Pure predicate over the control, the options and the document state.
    """
    if control.kind in STRUCTURAL_KINDS:
        return True

    if options.ignore_hidden_fields and not control.visible:
        logger.debug(f"Skipping invisible control name='{control.name}' id='{control.dom_id}'")
        return True

    normalizer = normalizer or FieldNormalizer()
    fingerprint = normalizer.fingerprint(control, options, document)
    if is_any_match(fingerprint, options.ignored_fields):
        logger.debug(f"Skipping ignored control: fingerprint='{fingerprint.strip()}'")
        return True

    if options.ignore_fields_with_content:
        if control.kind == ControlKind.RADIO:
            if any(radio.checked for radio in document.radio_group(control.name)):
                return True

        if control.kind not in (ControlKind.CHECKBOX, ControlKind.RADIO):
            if control.value and control.value.strip():
                return True

    return False
