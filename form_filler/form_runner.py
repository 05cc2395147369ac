"""
FormFillRunner: one fill pass over every control of a document.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Set

from core.logger import bind_context, get_structured_logger
from form_filler.controls import ControlKind
from form_filler.data_generator import DataGenerator
from form_filler.document import FormDocument
from form_filler.element_filler import ElementFiller
from form_filler.options import FillOptions, Profile
from form_filler.session import SessionMemory
from form_filler.value_generator import BaseValueGenerator


@dataclass
class FillPassResult:
    """Summary of a fill pass."""

    filled: int = 0
    skipped: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.filled + self.skipped + self.failed


class FormFillRunner:
    """
    Runs fill passes. Every pass gets its own SessionMemory, so passes over
    different documents never share confirmation values.
    """

    def __init__(
        self,
        options: FillOptions,
        value_generator: Optional[BaseValueGenerator] = None,
        generator: Optional[DataGenerator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.options = options
        self.value_generator = value_generator
        self.generator = generator
        self.logger = logger or logging.getLogger(__name__)
        self._events = get_structured_logger(__name__)

    def _profile_for(self, url: Optional[str]) -> Optional[Profile]:
        if not url:
            return None
        return self.options.find_profile(url)

    async def fill(self, document: FormDocument, url: Optional[str] = None) -> FillPassResult:
        """
        Fill every control of the document in document order.

        A failure on one control is logged and does not stop the pass.
        """
        profile = self._profile_for(url)
        filler = ElementFiller(
            options=self.options,
            document=document,
            memory=SessionMemory(),
            profile=profile,
            generator=self.generator,
            value_generator=self.value_generator,
            logger=self.logger,
        )
        pass_log = bind_context(
            self._events,
            pass_id=uuid.uuid4().hex[:8],
            url=url or "",
            profile=profile.name if profile else "",
        )
        pass_log.info("fill_pass_started")

        result = FillPassResult()
        seen_radio_groups: Set[str] = set()

        for control in document.controls():
            is_radio = control.kind == ControlKind.RADIO and bool(control.name)
            if is_radio and control.name in seen_radio_groups:
                continue

            try:
                filled = await filler.fill(control)
            except Exception as e:
                result.failed += 1
                result.errors.append(f"{control.kind.value} '{control.name or control.dom_id}': {e}")
                self.logger.error(
                    f"Failed to fill {control.kind.value} control '{control.name or control.dom_id}': {e}",
                    exc_info=True,
                )
                continue

            if filled:
                result.filled += 1
                if is_radio:
                    seen_radio_groups.add(control.name)
            else:
                result.skipped += 1

        pass_log.info(
            "fill_pass_finished",
            filled=result.filled,
            skipped=result.skipped,
            failed=result.failed,
        )
        return result
