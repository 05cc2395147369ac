"""
Pydantic models for fill options and custom field rules.

Options are immutable for the duration of a fill pass.
"""

import logging
import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


class CustomFieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    DATE = "date"
    NUMBER = "number"
    TELEPHONE = "telephone"
    REGEX = "regex"
    ALPHANUMERIC = "alphanumeric"
    RANDOMIZED_LIST = "randomized-list"
    FIRST_NAME = "first-name"
    LAST_NAME = "last-name"
    FULL_NAME = "full-name"
    USERNAME = "username"
    WEBSITE = "website"


class CustomFieldRule(BaseModel):
    """
    Authoring override mapping name patterns to a synthesis strategy.

    `match` holds case-insensitive regular expressions searched in the
    control's fingerprint. The remaining attributes parameterize the
    generator for `type`:
        text: min/max words, max_length
        number: min/max value
        date: template (strftime format), min/max as day offsets from today
        telephone / alphanumeric: template
        regex: template is the pattern to generate from
        randomized-list: values (key "list" in option files)
        email: email_* attributes
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    match: List[str] = Field(default_factory=list)
    type: CustomFieldType
    template: Optional[str] = None
    min: Optional[int] = None
    max: Optional[int] = None
    values: List[str] = Field(default_factory=list, alias="list")
    max_length: Optional[int] = Field(default=None, ge=1)

    email_prefix: str = ""
    email_username: str = "random"  # random, list, username, name, regex
    email_username_list: List[str] = Field(default_factory=list)
    email_username_regex: str = ""
    email_hostname: str = "list"  # random, list
    email_hostname_list: List[str] = Field(default_factory=list)

    @field_validator("email_username")
    @classmethod
    def validate_email_username(cls, v: str) -> str:
        allowed = {"random", "list", "username", "name", "regex"}
        if v not in allowed:
            raise ValueError(f"email_username must be one of {allowed}")
        return v

    @field_validator("email_hostname")
    @classmethod
    def validate_email_hostname(cls, v: str) -> str:
        allowed = {"random", "list"}
        if v not in allowed:
            raise ValueError(f"email_hostname must be one of {allowed}")
        return v


DEFAULT_EMAIL_CUSTOM_FIELD = CustomFieldRule(
    match=[],
    type=CustomFieldType.EMAIL,
    email_username="random",
    email_hostname="list",
    email_hostname_list=["mailinator.com", "example.com", "example.org"],
)


class Profile(BaseModel):
    """A named rule tier that applies to pages whose URL matches `url_match`."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    url_match: str = ""
    fields: List[CustomFieldRule] = Field(default_factory=list)


class FieldMatchSettings(BaseModel):
    """Which control attributes contribute to the match fingerprint."""

    model_config = ConfigDict(frozen=True)

    match_name: bool = True
    match_id: bool = True
    match_class: bool = True
    match_placeholder: bool = True
    match_label: bool = True
    match_aria_label: bool = True
    match_aria_labelledby: bool = True


class PasswordMode(str, Enum):
    GENERATED = "generated"
    FIXED = "fixed"


class PasswordSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: PasswordMode = PasswordMode.GENERATED
    password: str = ""
    # Generated passwords are logged so an operator can log in afterwards
    log_generated: bool = True

    @model_validator(mode="after")
    def fixed_mode_needs_password(self) -> "PasswordSettings":
        if self.mode == PasswordMode.FIXED and not self.password:
            raise ValueError("password must be set when password mode is 'fixed'")
        return self


class FillOptions(BaseModel):
    """Configuration for one fill pass."""

    model_config = ConfigDict(frozen=True)

    field_match_settings: FieldMatchSettings = Field(default_factory=FieldMatchSettings)
    ignored_fields: List[str] = Field(default_factory=lambda: ["captcha", "hipinputtext"])
    confirm_fields: List[str] = Field(default_factory=lambda: ["confirm", "reenter", "retype", "repeat", "secondary"])
    agree_terms_fields: List[str] = Field(default_factory=lambda: ["agree", "terms", "conditions"])
    default_max_length: int = Field(default=20, ge=1)
    trigger_click_events: bool = True
    ignore_fields_with_content: bool = False
    ignore_hidden_fields: bool = True
    password_settings: PasswordSettings = Field(default_factory=PasswordSettings)
    fields: List[CustomFieldRule] = Field(default_factory=list)
    profiles: List[Profile] = Field(default_factory=list)

    def find_profile(self, url: str) -> Optional[Profile]:
        """Return the first profile whose url_match pattern matches the URL."""
        for profile in self.profiles:
            if not profile.url_match:
                continue
            try:
                if re.search(profile.url_match, url, re.IGNORECASE):
                    return profile
            except re.error as e:
                logger.warning(
                    f"Invalid url_match pattern '{profile.url_match}' in profile '{profile.name}'. Error: {e}"
                )
        return None
