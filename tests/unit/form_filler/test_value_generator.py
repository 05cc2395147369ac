"""Unit tests for LLMValueGenerator."""

import asyncio
import time
from unittest.mock import MagicMock

import pytest

from form_filler.exceptions import ValueGenerationError
from form_filler.value_generator import GeneratedValue, LLMValueGenerator
from llm.exceptions import LLMGenerationError
from llm.prompts import FIELD_VALUE_SYSTEM_PROMPT


@pytest.fixture
def llm_client() -> MagicMock:
    client = MagicMock()
    client.generate_structured_response.return_value = GeneratedValue(value="  Jane Doe ")
    return client


@pytest.mark.asyncio
async def test_generate_value_returns_stripped_value(llm_client):
    generator = LLMValueGenerator(llm_client)

    value = await generator.generate_value("full-name", "Your name", "corp")

    assert value == "Jane Doe"
    prompt, schema, system_prompt = llm_client.generate_structured_response.call_args.args
    assert "full-name" in prompt
    assert "Your name" in prompt
    assert "corp" in prompt
    assert schema is GeneratedValue
    assert system_prompt == FIELD_VALUE_SYSTEM_PROMPT


@pytest.mark.asyncio
async def test_missing_context_is_marked_in_prompt(llm_client):
    await LLMValueGenerator(llm_client).generate_value("text", "City", "")
    prompt = llm_client.generate_structured_response.call_args.args[0]
    assert "none" in prompt


@pytest.mark.asyncio
async def test_dict_response_is_validated(llm_client):
    llm_client.generate_structured_response.return_value = {"value": "42"}
    assert await LLMValueGenerator(llm_client).generate_value("number", "Age", "") == "42"


@pytest.mark.asyncio
async def test_empty_value_raises(llm_client):
    llm_client.generate_structured_response.return_value = GeneratedValue(value="   ")
    with pytest.raises(ValueGenerationError) as exc_info:
        await LLMValueGenerator(llm_client).generate_value("email", "Email", "")
    assert exc_info.value.field_type == "email"


@pytest.mark.asyncio
async def test_llm_errors_propagate(llm_client):
    llm_client.generate_structured_response.side_effect = LLMGenerationError("boom")
    with pytest.raises(LLMGenerationError):
        await LLMValueGenerator(llm_client).generate_value("text", "City", "")


@pytest.mark.asyncio
async def test_timeout(llm_client):
    def slow(*args, **kwargs):
        time.sleep(0.5)
        return GeneratedValue(value="late")

    llm_client.generate_structured_response.side_effect = slow
    with pytest.raises(asyncio.TimeoutError):
        await LLMValueGenerator(llm_client, timeout_seconds=0.05).generate_value("text", "City", "")
