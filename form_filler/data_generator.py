"""
DataGenerator: local random synthesis of plausible form values.

All randomness goes through one random.Random instance so a seeded
generator is fully reproducible.
"""

import logging
import random
import re
import string
from datetime import date, timedelta
from typing import Callable, Dict, Optional

import rstr
from dateutil import parser as date_parser

from form_filler.options import CustomFieldRule, CustomFieldType
from form_filler.session import SessionMemory
from form_filler.word_lists import (
    CONSONANTS,
    FIRST_NAMES,
    LAST_NAMES,
    TOP_LEVEL_DOMAINS,
    VOWELS,
    WORDS,
)

logger = logging.getLogger(__name__)

DEFAULT_DATE_SPAN_DAYS = 3650
DEFAULT_PHONE_TEMPLATE = "+1 (XxX) XxX-XxxX"
DATE_FORMAT = "%Y-%m-%d"


def parse_date(raw: Optional[str]) -> Optional[date]:
    """Parse a min/max date attribute; anything unparseable is None."""
    if not raw or not raw.strip():
        return None
    try:
        return date_parser.parse(raw.strip()).date()
    except (ValueError, OverflowError) as e:
        logger.debug(f"Ignoring unparseable date bound '{raw}': {e}")
        return None


def truncate_words(text: str, max_length: int) -> str:
    """Cut text to max_length, on a word boundary when one exists."""
    if len(text) <= max_length:
        return text
    cut = text[:max_length]
    if " " in cut:
        cut = cut[: cut.rindex(" ")]
    return cut.rstrip(" ,")


class DataGenerator:
    """Random value synthesis used when no AI value is available."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._rstr = rstr.Rstr(self.rng)
        self._rule_generators: Dict[CustomFieldType, Callable[[CustomFieldRule, int, SessionMemory], str]] = {
            CustomFieldType.TEXT: self._text_for_rule,
            CustomFieldType.EMAIL: self._email_for_rule,
            CustomFieldType.DATE: self._date_for_rule,
            CustomFieldType.NUMBER: self._number_for_rule,
            CustomFieldType.TELEPHONE: self._telephone_for_rule,
            CustomFieldType.REGEX: self._regex_for_rule,
            CustomFieldType.ALPHANUMERIC: self._alphanumeric_for_rule,
            CustomFieldType.RANDOMIZED_LIST: self._list_for_rule,
            CustomFieldType.FIRST_NAME: self._first_name_for_rule,
            CustomFieldType.LAST_NAME: self._last_name_for_rule,
            CustomFieldType.FULL_NAME: self._full_name_for_rule,
            CustomFieldType.USERNAME: self._username_for_rule,
            CustomFieldType.WEBSITE: lambda rule, max_length, memory: self.website(),
        }

    # --- primitives ---

    def random_number(self, minimum: int, maximum: int) -> int:
        """Uniform integer in the closed range [minimum, maximum]."""
        if minimum > maximum:
            minimum, maximum = maximum, minimum
        return self.rng.randint(minimum, maximum)

    def boolean(self) -> bool:
        return self.rng.random() > 0.5

    def word(self) -> str:
        return self.rng.choice(WORDS)

    def words(self, count: int) -> str:
        return " ".join(self.word() for _ in range(max(count, 1)))

    def scrambled_word(self, min_length: int = 3, max_length: int = 15) -> str:
        """Pronounceable nonsense word alternating consonants and vowels."""
        length = self.random_number(min_length, max_length)
        letters = []
        for i in range(length):
            pool = CONSONANTS if i % 2 == 0 else VOWELS
            letters.append(self.rng.choice(pool))
        return "".join(letters).capitalize()

    def sentence(self, min_words: int = 3, max_words: int = 12, max_length: Optional[int] = None) -> str:
        text = self.words(self.random_number(min_words, max_words)).capitalize()
        if max_length is not None:
            text = truncate_words(text, max(max_length - 1, 1))
        return f"{text}."

    def phrase(self, max_length: int) -> str:
        """A capitalized run of words no longer than max_length."""
        max_length = max(max_length, 1)
        text = self.word()
        while True:
            candidate = f"{text} {self.word()}"
            if len(candidate) > max_length or self.rng.random() < 0.15:
                break
            text = candidate
        return text[:max_length].capitalize()

    def paragraph(self, min_words: int, max_words: int, max_length: int) -> str:
        """Several sentences totalling between min_words and max_words words, cut to max_length."""
        remaining = self.random_number(min_words, max_words)
        sentences = []
        while remaining > 0:
            count = min(remaining, self.random_number(3, 12))
            sentences.append(f"{self.words(count).capitalize()}.")
            remaining -= count
        return truncate_words(" ".join(sentences), max(max_length, 1))

    # --- dates ---

    def date(self, min_date: Optional[date] = None, max_date: Optional[date] = None) -> str:
        """A YYYY-MM-DD date in [min_date, max_date]; open sides get a ten year window."""
        if min_date is None and max_date is None:
            today = date.today()
            min_date = today - timedelta(days=DEFAULT_DATE_SPAN_DAYS // 2)
            max_date = today + timedelta(days=DEFAULT_DATE_SPAN_DAYS // 2)
        elif min_date is None:
            min_date = max_date - timedelta(days=DEFAULT_DATE_SPAN_DAYS)
        elif max_date is None:
            max_date = min_date + timedelta(days=DEFAULT_DATE_SPAN_DAYS)

        if min_date > max_date:
            return min_date.strftime(DATE_FORMAT)
        ordinal = self.random_number(min_date.toordinal(), max_date.toordinal())
        return date.fromordinal(ordinal).strftime(DATE_FORMAT)

    def time(self) -> str:
        return f"{self.random_number(0, 23):02d}:{self.random_number(0, 59):02d}"

    def year(self) -> str:
        return str(self.random_number(1970, date.today().year + 5))

    def month(self) -> str:
        return f"{self.random_number(1, 12):02d}"

    def week_number(self) -> str:
        return f"{self.random_number(1, 52):02d}"

    # --- shaped values ---

    def phone_number(self, template: str = DEFAULT_PHONE_TEMPLATE) -> str:
        """Fill a template: X is a digit 1-9, x is a digit 0-9."""
        return self._fill_template(template)

    def website(self) -> str:
        return f"https://www.{self.scrambled_word(4, 10).lower()}.{self.rng.choice(TOP_LEVEL_DOMAINS)}"

    def color(self) -> str:
        return "#" + "".join(f"{self.random_number(0, 255):02x}" for _ in range(3))

    def first_name(self) -> str:
        return self.rng.choice(FIRST_NAMES)

    def last_name(self) -> str:
        return self.rng.choice(LAST_NAMES)

    def username(self) -> str:
        return f"{self.first_name().lower()}{self.random_number(10, 9999)}"

    def _fill_template(self, template: str) -> str:
        """
        Expand a character template:
            X digit 1-9, x digit 0-9, L/l upper/lower letter,
            C/c upper/lower consonant, V/v upper/lower vowel.
        Any other character is copied as is.
        """
        pools = {
            "X": "123456789",
            "x": string.digits,
            "L": string.ascii_uppercase,
            "l": string.ascii_lowercase,
            "C": CONSONANTS.upper(),
            "c": CONSONANTS,
            "V": VOWELS.upper(),
            "v": VOWELS,
        }
        return "".join(self.rng.choice(pools[ch]) if ch in pools else ch for ch in template)

    # --- custom field rules ---

    def value_for_rule(self, rule: CustomFieldRule, max_length: int, memory: SessionMemory) -> str:
        """Synthesize a value following a custom field rule."""
        generator = self._rule_generators.get(rule.type)
        if generator is None:
            return self.phrase(max_length)
        return generator(rule, max_length, memory)

    def _text_for_rule(self, rule: CustomFieldRule, max_length: int, memory: SessionMemory) -> str:
        min_words = rule.min if rule.min is not None else 1
        max_words = rule.max if rule.max is not None else 10
        return self.sentence(min_words, max_words, rule.max_length or max_length)

    def _number_for_rule(self, rule: CustomFieldRule, max_length: int, memory: SessionMemory) -> str:
        minimum = rule.min if rule.min is not None else 0
        maximum = rule.max if rule.max is not None else 99999
        return str(self.random_number(minimum, maximum))

    def _date_for_rule(self, rule: CustomFieldRule, max_length: int, memory: SessionMemory) -> str:
        today = date.today()
        min_date = today + timedelta(days=rule.min) if rule.min is not None else None
        max_date = today + timedelta(days=rule.max) if rule.max is not None else None
        value = self.date(min_date, max_date)
        if rule.template:
            return date.fromisoformat(value).strftime(rule.template)
        return value

    def _telephone_for_rule(self, rule: CustomFieldRule, max_length: int, memory: SessionMemory) -> str:
        return self.phone_number(rule.template or DEFAULT_PHONE_TEMPLATE)

    def _alphanumeric_for_rule(self, rule: CustomFieldRule, max_length: int, memory: SessionMemory) -> str:
        if not rule.template:
            return self.phrase(max_length)
        return self._fill_template(rule.template)

    def _xeger(self, pattern: str) -> Optional[str]:
        try:
            return self._rstr.xeger(pattern)
        except (re.error, ValueError) as e:
            logger.warning(f"Cannot generate from regex '{pattern}': {e}")
            return None

    def _regex_for_rule(self, rule: CustomFieldRule, max_length: int, memory: SessionMemory) -> str:
        if rule.template:
            value = self._xeger(rule.template)
            if value is not None:
                return value
        return self.phrase(max_length)

    def _list_for_rule(self, rule: CustomFieldRule, max_length: int, memory: SessionMemory) -> str:
        if not rule.values:
            return self.phrase(max_length)
        return self.rng.choice(rule.values)

    def _first_name_for_rule(self, rule: CustomFieldRule, max_length: int, memory: SessionMemory) -> str:
        memory.previous_first_name = self.first_name()
        return memory.previous_first_name

    def _last_name_for_rule(self, rule: CustomFieldRule, max_length: int, memory: SessionMemory) -> str:
        memory.previous_last_name = self.last_name()
        return memory.previous_last_name

    def _full_name_for_rule(self, rule: CustomFieldRule, max_length: int, memory: SessionMemory) -> str:
        memory.previous_first_name = self.first_name()
        memory.previous_last_name = self.last_name()
        return f"{memory.previous_first_name} {memory.previous_last_name}"

    def _username_for_rule(self, rule: CustomFieldRule, max_length: int, memory: SessionMemory) -> str:
        memory.previous_username = self.username()
        return memory.previous_username

    def _email_username(self, rule: CustomFieldRule, memory: SessionMemory) -> str:
        mode = rule.email_username
        if mode == "list" and rule.email_username_list:
            return self.rng.choice(rule.email_username_list)
        if mode == "username" and memory.previous_username:
            return memory.previous_username
        if mode == "name" and (memory.previous_first_name or memory.previous_last_name):
            parts = [memory.previous_first_name, memory.previous_last_name]
            return ".".join(part for part in parts if part)
        if mode == "regex" and rule.email_username_regex:
            value = self._xeger(rule.email_username_regex)
            if value:
                return value
        return self.scrambled_word(4, 10)

    def _email_for_rule(self, rule: CustomFieldRule, max_length: int, memory: SessionMemory) -> str:
        username = self._email_username(rule, memory)
        if rule.email_hostname == "list" and rule.email_hostname_list:
            hostname = self.rng.choice(rule.email_hostname_list)
        else:
            hostname = f"{self.scrambled_word(4, 10)}.{self.rng.choice(TOP_LEVEL_DOMAINS)}"
        return f"{rule.email_prefix}{username}@{hostname}".lower()
