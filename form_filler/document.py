"""
FormDocument: the filler's view of the page that owns the controls.

The filler never discovers controls itself. It asks the document for label
text, radio groups, write-back and event dispatch.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from form_filler.controls import Control, ControlKind

# Order matters: page scripts may listen on any of these.
FILL_EVENTS: Tuple[str, ...] = ("input", "click", "change", "blur")


class FormDocument(ABC):
    """Abstract base class for documents the filler works against."""

    @abstractmethod
    def controls(self) -> List[Control]:
        """All fillable controls in document order."""

    @abstractmethod
    def labels_for(self, dom_id: str) -> List[str]:
        """Raw inner HTML of every label[for=dom_id]."""

    @abstractmethod
    def element_text(self, element_id: str) -> Optional[str]:
        """Raw inner HTML of the element with the given id, if any."""

    def radio_group(self, name: str) -> List[Control]:
        """Radio controls sharing the given group name."""
        return [
            control
            for control in self.controls()
            if control.kind == ControlKind.RADIO and control.name == name
        ]

    @abstractmethod
    async def commit(self, control: Control) -> None:
        """Write the control's current state back to the live element."""

    @abstractmethod
    async def dispatch_events(self, control: Control, events: Sequence[str]) -> None:
        """Fire DOM-style events on the control, in order."""


class InMemoryFormDocument(FormDocument):
    """
    Document backed by plain Control objects.

    Commits are no-ops (the controls are the state) and dispatched events
    are recorded in `events` as (control key, event name) pairs.
    """

    def __init__(
        self,
        controls: Iterable[Control] = (),
        labels: Optional[Dict[str, List[str]]] = None,
        elements: Optional[Dict[str, str]] = None,
    ):
        self._controls: List[Control] = list(controls)
        for index, control in enumerate(self._controls):
            if not control.key:
                control.key = str(index)
        self._labels = labels or {}
        self._elements = elements or {}
        self.events: List[Tuple[str, str]] = []
        self.commits: List[str] = []

    def add(self, control: Control) -> Control:
        if not control.key:
            control.key = str(len(self._controls))
        self._controls.append(control)
        return control

    def controls(self) -> List[Control]:
        return list(self._controls)

    def labels_for(self, dom_id: str) -> List[str]:
        if not dom_id:
            return []
        return list(self._labels.get(dom_id, []))

    def element_text(self, element_id: str) -> Optional[str]:
        return self._elements.get(element_id)

    async def commit(self, control: Control) -> None:
        self.commits.append(control.key)

    async def dispatch_events(self, control: Control, events: Sequence[str]) -> None:
        for event in events:
            self.events.append((control.key, event))

    def events_for(self, control: Control) -> List[str]:
        return [event for key, event in self.events if key == control.key]
