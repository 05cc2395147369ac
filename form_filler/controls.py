"""
Models for the form controls the filler reads and writes.

A Control is a snapshot of one live element. Documents build controls and
push the filler's writes back to the page.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ControlKind(str, Enum):
    """Semantic category of a form control (HTML input type or element kind)."""

    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    RANGE = "range"
    DATE = "date"
    DATETIME = "datetime"
    DATETIME_LOCAL = "datetime-local"
    TIME = "time"
    MONTH = "month"
    WEEK = "week"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SELECT_ONE = "select-one"
    SELECT_MULTIPLE = "select-multiple"
    TEL = "tel"
    URL = "url"
    COLOR = "color"
    SEARCH = "search"
    TEXTAREA = "textarea"
    CONTENT_EDITABLE = "contenteditable"

    # Structural kinds, never filled
    BUTTON = "button"
    SUBMIT = "submit"
    RESET = "reset"
    FILE = "file"
    HIDDEN = "hidden"
    IMAGE = "image"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ControlKind":
        """Map a raw element type to a kind; unknown types are generic text."""
        if not raw:
            return cls.TEXT
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.TEXT


STRUCTURAL_KINDS = frozenset(
    {
        ControlKind.BUTTON,
        ControlKind.SUBMIT,
        ControlKind.RESET,
        ControlKind.FILE,
        ControlKind.HIDDEN,
        ControlKind.IMAGE,
    }
)

SELECT_KINDS = frozenset({ControlKind.SELECT_ONE, ControlKind.SELECT_MULTIPLE})


@dataclass
class SelectOption:
    value: str
    label: str = ""
    selected: bool = False
    disabled: bool = False


@dataclass
class Control:
    """
    Snapshot of one fillable element.

    Attributes:
        kind: Control category
        key: Opaque handle the owning document uses to find the live element
        min_bound / max_bound: Raw min/max attribute strings (numbers or dates)
        max_length: maxlength attribute, None or <= 0 when absent
        width / height / visibility: Rendered size and computed visibility style
    """

    kind: ControlKind
    key: str = ""
    name: str = ""
    dom_id: str = ""
    css_classes: str = ""
    placeholder: str = ""
    aria_label: str = ""
    aria_labelledby_ids: List[str] = field(default_factory=list)
    min_bound: Optional[str] = None
    max_bound: Optional[str] = None
    max_length: Optional[int] = None
    value: str = ""
    checked: bool = False
    disabled: bool = False
    options: List[SelectOption] = field(default_factory=list)
    content_editable: bool = False
    text_content: str = ""
    width: float = 1.0
    height: float = 1.0
    visibility: str = "visible"

    def __post_init__(self):
        if not isinstance(self.kind, ControlKind):
            self.kind = ControlKind.parse(self.kind)

    @property
    def visible(self) -> bool:
        """
        Zero-by-zero elements are invisible whatever their style (this also
        covers display:none); sized elements are invisible when their
        visibility style is "hidden".
        """
        if not self.width and not self.height:
            return False
        return self.visibility != "hidden"

    @property
    def is_multiple(self) -> bool:
        return self.kind == ControlKind.SELECT_MULTIPLE

    def select_option(self, index: int) -> None:
        """Mark an option selected. Single selects drop any previous selection."""
        if not self.is_multiple:
            for option in self.options:
                option.selected = False
        self.options[index].selected = True

    @property
    def selected_values(self) -> List[str]:
        return [option.value for option in self.options if option.selected]
