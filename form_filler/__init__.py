"""
Form Filler Engine - package initialization with lazy exports.
"""

from importlib import import_module
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .controls import Control, ControlKind, SelectOption
    from .document import FormDocument, InMemoryFormDocument
    from .element_filler import ElementFiller
    from .form_runner import FormFillRunner, FillPassResult
    from .options import CustomFieldRule, CustomFieldType, FillOptions, Profile
    from .options_store import OptionsStore
    from .page_document import PageFormDocument
    from .session import SessionMemory
    from .value_generator import BaseValueGenerator, LLMValueGenerator

__all__ = [
    "Control",
    "ControlKind",
    "SelectOption",
    "FormDocument",
    "InMemoryFormDocument",
    "ElementFiller",
    "FormFillRunner",
    "FillPassResult",
    "CustomFieldRule",
    "CustomFieldType",
    "FillOptions",
    "Profile",
    "OptionsStore",
    "PageFormDocument",
    "SessionMemory",
    "BaseValueGenerator",
    "LLMValueGenerator",
]

_LAZY_IMPORTS = {
    "Control": "form_filler.controls",
    "ControlKind": "form_filler.controls",
    "SelectOption": "form_filler.controls",
    "FormDocument": "form_filler.document",
    "InMemoryFormDocument": "form_filler.document",
    "ElementFiller": "form_filler.element_filler",
    "FormFillRunner": "form_filler.form_runner",
    "FillPassResult": "form_filler.form_runner",
    "CustomFieldRule": "form_filler.options",
    "CustomFieldType": "form_filler.options",
    "FillOptions": "form_filler.options",
    "Profile": "form_filler.options",
    "OptionsStore": "form_filler.options_store",
    "PageFormDocument": "form_filler.page_document",
    "SessionMemory": "form_filler.session",
    "BaseValueGenerator": "form_filler.value_generator",
    "LLMValueGenerator": "form_filler.value_generator",
}


def __getattr__(name: str) -> Any:
    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module 'form_filler' has no attribute '{name}'")
    module = import_module(_LAZY_IMPORTS[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
