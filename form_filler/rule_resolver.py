"""
RuleResolver: find the custom field rule that applies to a fingerprint.

Profile rules are searched before global rules; inside a tier the first
matching rule wins, so rule order is significant to the author.
"""

import logging
import re
from typing import Iterable, Optional, Sequence

from form_filler.options import CustomFieldRule, CustomFieldType

logger = logging.getLogger(__name__)


def is_any_match(haystack: str, patterns: Iterable[str]) -> bool:
    """
    True if any pattern is found in haystack (case-insensitive regex search).

    Invalid patterns never match.
    """
    for pattern in patterns:
        try:
            if re.search(pattern, haystack, re.IGNORECASE):
                return True
        except re.error as e:
            logger.warning(f"[is_any_match] Invalid regex pattern '{pattern}'. Error: {e}")
    return False


def find_rule_in_list(
    rules: Sequence[CustomFieldRule],
    fingerprint: str,
    allowed_types: Sequence[CustomFieldType] = (),
) -> Optional[CustomFieldRule]:
    """Return the first rule in a single tier matching fingerprint and type filter."""
    for rule in rules:
        if not is_any_match(fingerprint, rule.match):
            continue
        if allowed_types and rule.type not in allowed_types:
            continue
        return rule
    return None


class RuleResolver:
    """Two-tier rule lookup bound to one profile tier and the global tier."""

    def __init__(
        self,
        global_rules: Sequence[CustomFieldRule] = (),
        profile_rules: Sequence[CustomFieldRule] = (),
    ):
        self.global_rules = list(global_rules)
        self.profile_rules = list(profile_rules)

    def resolve(
        self,
        fingerprint: str,
        allowed_types: Sequence[CustomFieldType] = (),
    ) -> Optional[CustomFieldRule]:
        """
        Find the rule for a fingerprint.

        Args:
            fingerprint: Control fingerprint
            allowed_types: Accepted rule types; empty accepts any type

        Returns:
            First accepted profile rule, else first accepted global rule, else None
        """
        rule = find_rule_in_list(self.profile_rules, fingerprint, allowed_types)
        if rule is not None:
            logger.debug(f"[RuleResolver.resolve] Profile rule matched: type='{rule.type.value}', match={rule.match}")
            return rule

        rule = find_rule_in_list(self.global_rules, fingerprint, allowed_types)
        if rule is not None:
            logger.debug(f"[RuleResolver.resolve] Global rule matched: type='{rule.type.value}', match={rule.match}")
        return rule
