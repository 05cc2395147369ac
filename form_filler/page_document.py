"""
PageFormDocument: FormDocument over a live Playwright page.

Controls are snapshotted with one evaluate() call. Each element is tagged
with a data attribute so later writes and events reach the same element.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from playwright.async_api import Page

from form_filler.controls import Control, ControlKind, SelectOption
from form_filler.document import FormDocument

logger = logging.getLogger(__name__)

KEY_ATTRIBUTE = "data-fake-fill-key"
CONTROL_SELECTOR = "input, textarea, select, [contenteditable]"

SNAPSHOT_SCRIPT = """([attr, selector]) => {
    const nodes = Array.from(document.querySelectorAll(selector));
    return nodes.map((el, index) => {
        const key = String(index);
        el.setAttribute(attr, key);
        const tag = el.tagName.toLowerCase();
        let kind = 'contenteditable';
        if (tag === 'textarea') kind = 'textarea';
        else if (tag === 'select') kind = el.multiple ? 'select-multiple' : 'select-one';
        else if (tag === 'input') kind = (el.getAttribute('type') || 'text').toLowerCase();

        const labelledBy = (el.getAttribute('aria-labelledby') || '').split(/\\s+/).filter(Boolean);
        const labelledTexts = {};
        labelledBy.forEach((id) => {
            const node = document.getElementById(id);
            if (node) labelledTexts[id] = node.innerHTML;
        });
        const labels = el.id
            ? Array.from(document.querySelectorAll(`label[for="${CSS.escape(el.id)}"]`)).map((l) => l.innerHTML)
            : [];
        const isField = tag === 'input' || tag === 'textarea' || tag === 'select';
        const maxLength = tag === 'input' || tag === 'textarea' ? el.maxLength : -1;

        return {
            key,
            kind,
            name: el.getAttribute('name') || '',
            dom_id: el.id || '',
            css_classes: typeof el.className === 'string' ? el.className : '',
            placeholder: el.getAttribute('placeholder') || '',
            aria_label: el.getAttribute('aria-label') || '',
            aria_labelledby_ids: labelledBy,
            min_bound: el.getAttribute('min'),
            max_bound: el.getAttribute('max'),
            max_length: maxLength > 0 ? maxLength : null,
            value: isField ? String(el.value || '') : '',
            checked: !!el.checked,
            disabled: !!el.disabled,
            options: tag === 'select'
                ? Array.from(el.options).map((o) => ({
                    value: o.value, label: o.text, selected: o.selected, disabled: o.disabled,
                }))
                : [],
            content_editable: !isField && !!el.isContentEditable,
            text_content: isField ? '' : (el.textContent || ''),
            width: el.offsetWidth,
            height: el.offsetHeight,
            visibility: window.getComputedStyle(el).visibility,
            labels,
            labelled_texts: labelledTexts,
        };
    });
}"""

COMMIT_SCRIPT = """([attr, key, state]) => {
    const el = document.querySelector(`[${attr}="${key}"]`);
    if (!el) return false;
    if (state.kind === 'contenteditable') {
        el.textContent = state.text_content;
    } else if (state.kind === 'checkbox' || state.kind === 'radio') {
        el.checked = state.checked;
    } else if (state.selected !== null) {
        Array.from(el.options).forEach((option, index) => { option.selected = !!state.selected[index]; });
    } else {
        el.value = state.value;
    }
    return true;
}"""

DISPATCH_SCRIPT = """([attr, key, events]) => {
    const el = document.querySelector(`[${attr}="${key}"]`);
    if (!el) return false;
    events.forEach((name) => el.dispatchEvent(new Event(name, { bubbles: true, cancelable: true })));
    return true;
}"""

_CONTROL_FIELDS = {
    "key", "kind", "name", "dom_id", "css_classes", "placeholder", "aria_label",
    "aria_labelledby_ids", "min_bound", "max_bound", "max_length", "value", "checked",
    "disabled", "content_editable", "text_content", "width", "height", "visibility",
}


def control_from_snapshot(item: Dict[str, Any]) -> Control:
    """Build a Control from one entry of the snapshot script's result."""
    fields = {name: item[name] for name in _CONTROL_FIELDS if name in item}
    fields["kind"] = ControlKind.parse(item.get("kind"))
    fields["options"] = [SelectOption(**option) for option in item.get("options") or []]
    return Control(**fields)


class PageFormDocument(FormDocument):
    """Document whose controls live on a Playwright page."""

    def __init__(
        self,
        page: Page,
        controls: Sequence[Control],
        labels: Optional[Dict[str, List[str]]] = None,
        elements: Optional[Dict[str, str]] = None,
    ):
        self.page = page
        self._controls = list(controls)
        self._labels = labels or {}
        self._elements = elements or {}

    @classmethod
    async def load(cls, page: Page) -> "PageFormDocument":
        """Snapshot every fillable element currently on the page."""
        snapshot = await page.evaluate(SNAPSHOT_SCRIPT, [KEY_ATTRIBUTE, CONTROL_SELECTOR])
        controls: List[Control] = []
        labels: Dict[str, List[str]] = {}
        elements: Dict[str, str] = {}

        for item in snapshot or []:
            control = control_from_snapshot(item)
            controls.append(control)
            if control.dom_id and item.get("labels"):
                labels.setdefault(control.dom_id, list(item["labels"]))
            elements.update(item.get("labelled_texts") or {})

        logger.info(f"Loaded {len(controls)} controls from {page.url}")
        return cls(page, controls, labels, elements)

    def controls(self) -> List[Control]:
        return list(self._controls)

    def labels_for(self, dom_id: str) -> List[str]:
        return list(self._labels.get(dom_id, []))

    def element_text(self, element_id: str) -> Optional[str]:
        return self._elements.get(element_id)

    async def commit(self, control: Control) -> None:
        state = {
            "kind": control.kind.value,
            "value": control.value,
            "checked": control.checked,
            "text_content": control.text_content,
            "selected": [option.selected for option in control.options] if control.options else None,
        }
        found = await self.page.evaluate(COMMIT_SCRIPT, [KEY_ATTRIBUTE, control.key, state])
        if not found:
            logger.warning(f"Element for control key '{control.key}' is no longer on the page")

    async def dispatch_events(self, control: Control, events: Sequence[str]) -> None:
        await self.page.evaluate(DISPATCH_SCRIPT, [KEY_ATTRIBUTE, control.key, list(events)])
