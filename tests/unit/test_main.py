"""Unit tests for main.py functions."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from config import LLMSettings
from form_filler.controls import Control, ControlKind
from form_filler.document import InMemoryFormDocument
from form_filler.value_generator import LLMValueGenerator
from main import build_value_generator, main, parse_args


def _fake_playwright(page_url: str = "https://example.com/form"):
    page = MagicMock()
    page.url = page_url
    page.goto = AsyncMock()

    browser = MagicMock()
    browser.new_page = AsyncMock(return_value=page)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)

    context_manager = MagicMock()
    context_manager.__aenter__ = AsyncMock(return_value=playwright)
    context_manager.__aexit__ = AsyncMock(return_value=False)
    return context_manager, page, browser


class TestParseArgs:
    def test_defaults(self):
        args = parse_args(["https://example.com"])
        assert args.url == "https://example.com"
        assert args.options is None
        assert args.profile_url is None

    def test_options_and_profile_url(self):
        args = parse_args(["https://example.com", "--options", "opts.json", "--profile-url", "https://staging"])
        assert args.options == Path("opts.json")
        assert args.profile_url == "https://staging"


class TestBuildValueGenerator:
    def test_disabled_by_default(self, app_config):
        config = app_config.model_copy(update={"llm": LLMSettings(LLM_ENABLED=False)})
        assert build_value_generator(config) is None

    @patch("llm.client_factory.LLMClient")
    def test_enabled(self, mock_client, app_config):
        llm = LLMSettings(LLM_ENABLED=True, LLM_PROVIDER="ollama", LLM_MODEL="llama3")
        config = app_config.model_copy(update={"llm": llm})

        generator = build_value_generator(config)

        assert isinstance(generator, LLMValueGenerator)
        assert generator.timeout_seconds == config.filler.ai_timeout_seconds


class TestMain:
    @pytest.mark.asyncio
    async def test_bad_options_file_exits_with_2(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("fields: [unclosed", encoding="utf-8")
        assert await main(["https://example.com", "--options", str(bad)]) == 2

    @pytest.mark.asyncio
    async def test_fill_pass_over_loaded_page(self, tmp_path):
        context_manager, page, browser = _fake_playwright()
        document = InMemoryFormDocument([Control(kind=ControlKind.TEXT, name="city")])

        with patch("main.async_playwright", return_value=context_manager), patch(
            "form_filler.page_document.PageFormDocument.load", AsyncMock(return_value=document)
        ):
            exit_code = await main(["https://example.com/form", "--options", str(tmp_path / "none.yaml")])

        assert exit_code == 0
        page.goto.assert_awaited_once()
        browser.close.assert_awaited_once()
        assert document.controls()[0].value
