"""
Selection algorithms for radio groups and select elements.
"""

from typing import List, Optional, Sequence

from form_filler.controls import Control, ControlKind
from form_filler.data_generator import DataGenerator


def pick_random_radio(
    radios: Sequence[Control],
    generator: DataGenerator,
    values_list: Sequence[str] = (),
) -> Optional[Control]:
    """
    Check one radio of a group at random.

    Only radios whose value is in values_list are candidates when the list is
    non-empty. Returns the checked radio, or None when there are no candidates.
    """
    candidates: List[Control] = [
        radio
        for radio in radios
        if radio.kind == ControlKind.RADIO and (not values_list or radio.value in values_list)
    ]
    if not candidates:
        return None

    chosen = candidates[generator.random_number(0, len(candidates) - 1)]
    for radio in radios:
        radio.checked = radio is chosen
    return chosen


def select_option_by_value(control: Control, value: str) -> bool:
    """Select the first option whose value equals value exactly."""
    for index, option in enumerate(control.options):
        if option.value == value:
            control.select_option(index)
            return True
    return False


def select_random_options(control: Control, generator: DataGenerator) -> bool:
    """
    Random selection for a select control. Returns True if anything was selected.

    Multiple: clear enabled options, then make n draws over the whole range,
    n uniform in [1, option count]. Disabled draws are skipped and repeated
    draws are harmless.

    Single: up to option count draws over the allowed range (a leading
    empty-valued placeholder is excluded); the first enabled option wins.
    """
    options = control.options
    options_count = len(options)
    if options_count < 1:
        return False

    value_selected = False

    if control.is_multiple:
        for option in options:
            if not option.disabled:
                option.selected = False

        number_to_select = generator.random_number(1, options_count)
        for _ in range(number_to_select):
            index = generator.random_number(0, options_count - 1)
            if options[index].disabled:
                continue
            options[index].selected = True
            value_selected = True
        return value_selected

    first_index = 1 if not options[0].value else 0
    if first_index > options_count - 1:
        return False

    for _ in range(options_count):
        index = generator.random_number(first_index, options_count - 1)
        if not options[index].disabled:
            control.select_option(index)
            return True
    return False
