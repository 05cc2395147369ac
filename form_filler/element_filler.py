"""
ElementFiller: per-control value dispatch for one fill pass.

Each control kind maps to a handler in a table. Handlers write the value
onto the Control and return whether the generic commit + event
notification should follow.
"""

import logging
import math
from typing import Awaitable, Callable, Dict, Optional, Sequence, Tuple

from form_filler.controls import SELECT_KINDS, Control, ControlKind
from form_filler.data_generator import DataGenerator, parse_date
from form_filler.document import FILL_EVENTS, FormDocument
from form_filler.eligibility import should_skip
from form_filler.normalizer import FieldNormalizer
from form_filler.options import (
    DEFAULT_EMAIL_CUSTOM_FIELD,
    CustomFieldRule,
    CustomFieldType,
    FillOptions,
    PasswordMode,
    Profile,
)
from form_filler.rule_resolver import RuleResolver, is_any_match
from form_filler.selection import pick_random_radio, select_option_by_value, select_random_options
from form_filler.session import SessionMemory
from form_filler.value_generator import BaseValueGenerator

DEFAULT_NUMBER_MIN = 1
DEFAULT_NUMBER_MAX = 100
PASSWORD_LENGTH = 8
CONTENT_EDITABLE_WORDS = (5, 100)

TEXTAREA_RULE_TYPES = (
    CustomFieldType.TEXT,
    CustomFieldType.ALPHANUMERIC,
    CustomFieldType.REGEX,
    CustomFieldType.RANDOMIZED_LIST,
)
TELEPHONE_RULE_TYPES = (
    CustomFieldType.TELEPHONE,
    CustomFieldType.REGEX,
    CustomFieldType.RANDOMIZED_LIST,
)


def _parse_bound(raw: Optional[str], rounding: Callable[[float], int]) -> Optional[int]:
    if raw is None or not str(raw).strip():
        return None
    try:
        number = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return rounding(number)


class ElementFiller:
    """
    Fills controls of one document during one pass.

    Session memory is owned by the pass and passed in explicitly; create a new
    filler (or at least a new SessionMemory) for every pass.
    """

    def __init__(
        self,
        options: FillOptions,
        document: FormDocument,
        memory: Optional[SessionMemory] = None,
        profile: Optional[Profile] = None,
        generator: Optional[DataGenerator] = None,
        value_generator: Optional[BaseValueGenerator] = None,
        normalizer: Optional[FieldNormalizer] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            options: Fill options for the pass
            document: Document owning the controls
            memory: Session memory for the pass (new one if None)
            profile: Active profile; its rules take precedence over global rules
            generator: Local random generator
            value_generator: Optional AI generator tried first for custom fields
            normalizer: FieldNormalizer used for fingerprints
            logger: Optional logger instance
        """
        self.options = options
        self.document = document
        self.memory = memory if memory is not None else SessionMemory()
        self.profile = profile
        self.generator = generator or DataGenerator()
        self.value_generator = value_generator
        self.normalizer = normalizer or FieldNormalizer()
        self.logger = logger or logging.getLogger(__name__)
        self.resolver = RuleResolver(
            global_rules=options.fields,
            profile_rules=profile.fields if profile else (),
        )

        self._input_handlers: Dict[ControlKind, Callable[[Control], Awaitable[bool]]] = {
            ControlKind.CHECKBOX: self._fill_checkbox,
            ControlKind.DATE: self._fill_date,
            ControlKind.DATETIME: self._fill_datetime,
            ControlKind.DATETIME_LOCAL: self._fill_datetime_local,
            ControlKind.TIME: self._fill_time,
            ControlKind.MONTH: self._fill_month,
            ControlKind.WEEK: self._fill_week,
            ControlKind.EMAIL: self._fill_email,
            ControlKind.NUMBER: self._fill_number,
            ControlKind.RANGE: self._fill_number,
            ControlKind.PASSWORD: self._fill_password,
            ControlKind.TEL: self._fill_tel,
            ControlKind.URL: self._fill_url,
            ControlKind.COLOR: self._fill_color,
            ControlKind.SEARCH: self._fill_search,
        }

    # --- helpers ---

    def fingerprint(self, control: Control) -> str:
        return self.normalizer.fingerprint(control, self.options, self.document)

    def should_skip(self, control: Control) -> bool:
        return should_skip(control, self.options, self.document, self.normalizer)

    def find_custom_field(
        self, control: Control, allowed_types: Sequence[CustomFieldType] = ()
    ) -> Optional[CustomFieldRule]:
        return self.resolver.resolve(self.fingerprint(control), allowed_types)

    def max_length(self, control: Optional[Control]) -> int:
        if control is not None and control.max_length and control.max_length > 0:
            return control.max_length
        return self.options.default_max_length

    def is_confirm_field(self, control: Control) -> bool:
        return is_any_match(control.name.lower(), self.options.confirm_fields)

    def _remember_named_value(self, rule: CustomFieldRule, value: str) -> None:
        if rule.type == CustomFieldType.FIRST_NAME:
            self.memory.previous_first_name = value
        elif rule.type == CustomFieldType.LAST_NAME:
            self.memory.previous_last_name = value
        elif rule.type == CustomFieldType.USERNAME:
            self.memory.previous_username = value
        elif rule.type == CustomFieldType.FULL_NAME:
            first, _, last = value.partition(" ")
            self.memory.previous_first_name = first
            self.memory.previous_last_name = last

    async def _generate_for_custom_field(
        self, rule: Optional[CustomFieldRule], control: Optional[Control] = None
    ) -> str:
        """
        Produce a value for a control, honouring its custom field rule.

        The AI generator is tried first when one is configured and a rule
        applies. Its failures are logged and the local generator is used.
        """
        max_length = self.max_length(control)
        if rule is None:
            return self.generator.phrase(max_length)

        if self.value_generator is not None:
            field_type = rule.type.value or (control.kind.value if control else "text")
            label = (control.aria_label or control.name) if control else ""
            try:
                value = await self.value_generator.generate_value(
                    field_type, label or "unknown", rule.template or ""
                )
                if value:
                    self._remember_named_value(rule, value)
                    return value
                self.logger.warning(f"AI generator returned no value for field '{label}' ({field_type}), using local generator")
            except Exception as e:
                self.logger.warning(
                    f"AI generation failed for field '{label}' ({field_type}), using local generator: {e}",
                    exc_info=True,
                )

        value = self.generator.value_for_rule(rule, max_length, self.memory)
        self._remember_named_value(rule, value)
        return value

    async def _notify(self, control: Control) -> None:
        await self.document.commit(control)
        if self.options.trigger_click_events:
            await self.document.dispatch_events(control, FILL_EVENTS)

    # --- entry points ---

    async def fill(self, control: Control) -> bool:
        """Fill any control, routing by kind. Returns True if it was filled."""
        if control.kind == ControlKind.TEXTAREA:
            return await self.fill_textarea(control)
        if control.kind in SELECT_KINDS:
            return await self.fill_select(control)
        if control.kind == ControlKind.CONTENT_EDITABLE:
            return await self.fill_content_editable(control)
        return await self.fill_input(control)

    async def fill_input(self, control: Control) -> bool:
        if self.should_skip(control):
            return False

        if control.kind == ControlKind.RADIO:
            return await self._fill_radio(control)

        handler = self._input_handlers.get(control.kind, self._fill_text)
        fire_event = await handler(control)
        if fire_event:
            await self._notify(control)
        self.logger.debug(f"Filled {control.kind.value} control name='{control.name}'")
        return True

    async def fill_textarea(self, control: Control) -> bool:
        if self.should_skip(control):
            return False

        rule = self.find_custom_field(control, TEXTAREA_RULE_TYPES)
        if rule is not None:
            control.value = await self._generate_for_custom_field(rule, control)
        else:
            control.value = self.generator.paragraph(
                CONTENT_EDITABLE_WORDS[0], CONTENT_EDITABLE_WORDS[1], self.max_length(control)
            )
        await self._notify(control)
        return True

    async def fill_select(self, control: Control) -> bool:
        if self.should_skip(control):
            return False
        if not control.options:
            return False

        value_selected = False
        rule = self.find_custom_field(control)
        # A rule value missing from the options falls through to random selection
        if rule is not None:
            value = await self._generate_for_custom_field(rule, control)
            value_selected = select_option_by_value(control, value)

        if not value_selected:
            value_selected = select_random_options(control, self.generator)

        if value_selected or control.is_multiple:
            await self.document.commit(control)
        if value_selected and self.options.trigger_click_events:
            await self.document.dispatch_events(control, FILL_EVENTS)
        return value_selected

    async def fill_content_editable(self, control: Control) -> bool:
        if not control.content_editable:
            return False
        control.text_content = self.generator.paragraph(
            CONTENT_EDITABLE_WORDS[0], CONTENT_EDITABLE_WORDS[1], self.options.default_max_length
        )
        await self.document.commit(control)
        return True

    # --- input handlers ---

    async def _fill_checkbox(self, control: Control) -> bool:
        if is_any_match(control.name.lower(), self.options.agree_terms_fields):
            control.checked = True
        else:
            control.checked = self.generator.boolean()
        return True

    async def _fill_date(self, control: Control) -> bool:
        rule = self.find_custom_field(control, [CustomFieldType.DATE])
        if rule is not None:
            control.value = await self._generate_for_custom_field(rule, control)
        else:
            control.value = self.generator.date(
                parse_date(control.min_bound), parse_date(control.max_bound)
            )
        return True

    async def _fill_datetime(self, control: Control) -> bool:
        control.value = f"{self.generator.date()}T{self.generator.time()}Z"
        return True

    async def _fill_datetime_local(self, control: Control) -> bool:
        control.value = f"{self.generator.date()}T{self.generator.time()}"
        return True

    async def _fill_time(self, control: Control) -> bool:
        control.value = self.generator.time()
        return True

    async def _fill_month(self, control: Control) -> bool:
        control.value = f"{self.generator.year()}-{self.generator.month()}"
        return True

    async def _fill_week(self, control: Control) -> bool:
        control.value = f"{self.generator.year()}-W{self.generator.week_number()}"
        return True

    async def _fill_email(self, control: Control) -> bool:
        if self.is_confirm_field(control):
            control.value = self.memory.previous_value
            return True

        rule = self.find_custom_field(control, [CustomFieldType.EMAIL]) or DEFAULT_EMAIL_CUSTOM_FIELD
        self.memory.previous_value = await self._generate_for_custom_field(rule, control)
        control.value = self.memory.previous_value
        return True

    def number_bounds(self, control: Control, rule: Optional[CustomFieldRule]) -> Tuple[int, int]:
        """
        Bounds for number/range controls.

        Defaults [1, 100], replaced by the control's min/max. A number rule
        replaces them again and is then clamped into the control's own
        bounds. If rule and control ranges do not overlap, the control's
        bounds are used.
        """
        control_min = _parse_bound(control.min_bound, math.ceil)
        control_max = _parse_bound(control.max_bound, math.floor)
        span = DEFAULT_NUMBER_MAX - DEFAULT_NUMBER_MIN

        minimum = control_min if control_min is not None else DEFAULT_NUMBER_MIN
        maximum = control_max if control_max is not None else DEFAULT_NUMBER_MAX
        if control_min is not None and control_max is None and minimum > maximum:
            maximum = minimum + span
        if control_max is not None and control_min is None and maximum < minimum:
            minimum = maximum - span

        if rule is None:
            return minimum, maximum

        rule_min = rule.min if rule.min is not None else minimum
        rule_max = rule.max if rule.max is not None else maximum
        if control_min is not None:
            rule_min = max(rule_min, control_min)
        if control_max is not None:
            rule_max = min(rule_max, control_max)

        if rule_min > rule_max:
            self.logger.debug(
                f"Number rule [{rule.min}, {rule.max}] does not overlap control bounds "
                f"[{control.min_bound}, {control.max_bound}] for '{control.name}', using control bounds"
            )
            return minimum, maximum
        return rule_min, rule_max

    async def _fill_number(self, control: Control) -> bool:
        rule = self.find_custom_field(control, [CustomFieldType.NUMBER])
        minimum, maximum = self.number_bounds(control, rule)
        control.value = str(self.generator.random_number(minimum, maximum))
        return True

    async def _fill_password(self, control: Control) -> bool:
        if self.is_confirm_field(control):
            control.value = self.memory.previous_password
            return True

        settings = self.options.password_settings
        if settings.mode == PasswordMode.FIXED:
            self.memory.previous_password = settings.password
        else:
            self.memory.previous_password = self.generator.scrambled_word(
                PASSWORD_LENGTH, PASSWORD_LENGTH
            ).lower()
            if settings.log_generated:
                self.logger.info(f"Generated password for '{control.name}': {self.memory.previous_password}")

        control.value = self.memory.previous_password
        return True

    async def _fill_radio(self, control: Control) -> bool:
        """
        Check one radio of the control's group. Returns True if one was checked.

        Only the chosen radio is committed; radios get no generic notification.
        """
        if not control.name:
            return False
        rule = self.find_custom_field(control, [CustomFieldType.RANDOMIZED_LIST])
        values_list = rule.values if rule is not None else []
        chosen = pick_random_radio(
            self.document.radio_group(control.name), self.generator, values_list
        )
        if chosen is None:
            return False
        await self.document.commit(chosen)
        self.logger.debug(f"Checked radio name='{control.name}' value='{chosen.value}'")
        return True

    async def _fill_tel(self, control: Control) -> bool:
        rule = self.find_custom_field(control, TELEPHONE_RULE_TYPES)
        if rule is not None:
            control.value = await self._generate_for_custom_field(rule, control)
        else:
            control.value = self.generator.phone_number()
        return True

    async def _fill_url(self, control: Control) -> bool:
        control.value = self.generator.website()
        return True

    async def _fill_color(self, control: Control) -> bool:
        control.value = self.generator.color()
        return True

    async def _fill_search(self, control: Control) -> bool:
        control.value = self.generator.words(1)
        return True

    async def _fill_text(self, control: Control) -> bool:
        if self.is_confirm_field(control):
            control.value = self.memory.previous_value
            return True

        rule = self.find_custom_field(control)
        self.memory.previous_value = await self._generate_for_custom_field(rule, control)
        control.value = self.memory.previous_value
        return True
