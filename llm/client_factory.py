import logging
from functools import lru_cache

from config import LLMSettings
from llm.llm_client import LLMClient

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def get_llm_client(llm_config: LLMSettings) -> LLMClient:
    """One shared LLMClient per settings object (LLMSettings is frozen, hence hashable)."""
    if not llm_config.LLM_ENABLED:
        logger.warning("LLM client requested while LLM_ENABLED is false")
    return LLMClient(llm_config)
