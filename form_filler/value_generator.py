"""
Value generators: optional AI source of field values.

The filler owns the fallback; generators are free to raise.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, Field

from form_filler.exceptions import ValueGenerationError
from llm.prompts import FIELD_VALUE_PROMPT, FIELD_VALUE_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class GeneratedValue(BaseModel):
    """Structured LLM response for a single field value."""

    value: str = Field(..., description="The generated value for the field")


class BaseValueGenerator(ABC):
    """Abstract base class for asynchronous field value generators."""

    @abstractmethod
    async def generate_value(self, field_type: str, label: str, context: str) -> Optional[str]:
        """
        Generate a value for a field.

        Args:
            field_type: Custom field type or control kind (e.g. "email", "text")
            label: Human readable field label (aria-label or name)
            context: Template/context from the matching custom field rule

        Returns:
            The value, or None when the generator has nothing to offer
        """


class LLMValueGenerator(BaseValueGenerator):
    """Generates values through the project's LLMClient."""

    def __init__(self, llm_client, timeout_seconds: Optional[float] = None):
        """
        Args:
            llm_client: LLMClient instance from llm.llm_client
            timeout_seconds: Upper bound for one generation call
        """
        self.llm_client = llm_client
        self.timeout_seconds = timeout_seconds

    async def generate_value(self, field_type: str, label: str, context: str) -> Optional[str]:
        prompt = FIELD_VALUE_PROMPT.format(
            field_type=field_type,
            label=label,
            context=context or "none",
        )
        logger.debug(f"LLM value request: type='{field_type}', label='{label}'")

        call = asyncio.to_thread(
            self.llm_client.generate_structured_response,
            prompt,
            GeneratedValue,
            FIELD_VALUE_SYSTEM_PROMPT,
        )
        if self.timeout_seconds:
            response = await asyncio.wait_for(call, timeout=self.timeout_seconds)
        else:
            response = await call

        if not isinstance(response, GeneratedValue):
            response = GeneratedValue.model_validate(response)

        value = response.value.strip()
        if not value:
            raise ValueGenerationError(field_type)

        logger.info(f"LLM generated value for '{label}' ({field_type})")
        return value
