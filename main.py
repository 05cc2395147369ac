import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from playwright.async_api import async_playwright

# It's important to set up logging before other imports that might use it.
from core.logger import setup_logging
from config import AppConfig, config

setup_logging()
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fill every form control on a page with synthetic values.")
    parser.add_argument("url", help="Page to open and fill")
    parser.add_argument(
        "--options",
        type=Path,
        default=None,
        help=f"Fill options file (YAML or JSON), default: {config.filler.options_path}",
    )
    parser.add_argument(
        "--profile-url",
        default=None,
        help="URL used to pick the rule profile (defaults to the page URL)",
    )
    return parser.parse_args(argv)


def build_value_generator(app_config: AppConfig):
    """Return the AI value generator when enabled in configuration."""
    if not app_config.llm.LLM_ENABLED:
        return None

    from form_filler.value_generator import LLMValueGenerator
    from llm.client_factory import get_llm_client

    return LLMValueGenerator(
        get_llm_client(app_config.llm),
        timeout_seconds=app_config.filler.ai_timeout_seconds,
    )


async def main(argv: Optional[list[str]] = None) -> int:
    """Open the page, run one fill pass and report the result."""
    from form_filler.exceptions import OptionsLoadError
    from form_filler.form_runner import FormFillRunner
    from form_filler.options_store import OptionsStore
    from form_filler.page_document import PageFormDocument

    args = parse_args(argv)

    try:
        options = OptionsStore(args.options or config.filler.options_path).load()
    except OptionsLoadError as e:
        logger.error(str(e))
        return 2

    runner = FormFillRunner(options, value_generator=build_value_generator(config))

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=config.filler.browser_headless)
        try:
            page = await browser.new_page()
            logger.info(f"Opening {args.url}")
            await page.goto(args.url, timeout=config.filler.navigation_timeout_ms)

            document = await PageFormDocument.load(page)
            result = await runner.fill(document, url=args.profile_url or page.url)
            logger.info(
                f"Fill pass finished: filled={result.filled}, skipped={result.skipped}, failed={result.failed}"
            )

            if config.filler.keep_browser_open and not config.filler.browser_headless:
                await asyncio.to_thread(input, "Press Enter to close the browser...")
        finally:
            await browser.close()

    return 1 if result.failed else 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
