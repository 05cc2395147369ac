import json
import logging
import re
from typing import Type, TypeVar

from langchain_anthropic import ChatAnthropic
from langchain_community.chat_models import ChatOllama
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI
from pydantic import BaseModel, SecretStr

from config import LLMSettings
from llm.exceptions import LLMGenerationError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


class LLMClient:
    """Thin synchronous wrapper over the langchain chat models we support."""

    def __init__(self, llm_config: LLMSettings):
        self.provider = llm_config.LLM_PROVIDER
        self.model = llm_config.LLM_MODEL
        self.api_key = llm_config.LLM_API_KEY
        self.timeout = llm_config.LLM_TIMEOUT
        self.max_retries = llm_config.LLM_MAX_RETRIES
        self.base_url = llm_config.LLM_BASE_URL
        self.temperature = llm_config.LLM_TEMPERATURE

        logger.info(
            f"LLMClient initialized with provider={self.provider}, model={self.model}, "
            f"base_url={self.base_url}, temperature={self.temperature}, "
            f"timeout={self.timeout}, max_retries={self.max_retries}"
        )

        if self.provider == "openai":
            self.client = ChatOpenAI(
                model=self.model,
                base_url=self.base_url,
                api_key=SecretStr(self.api_key),
                timeout=self.timeout,
                max_retries=self.max_retries,
                temperature=self.temperature,
            )
        elif self.provider == "ollama":
            # ChatOllama has no built-in retries
            llm = ChatOllama(
                model=self.model, base_url=self.base_url, temperature=self.temperature
            )
            self.client = llm.with_retry(
                stop_after_attempt=self.max_retries,
                wait_exponential_jitter=True,
            )
        elif self.provider == "anthropic":
            self.client = ChatAnthropic(
                model_name=self.model,
                api_key=SecretStr(self.api_key),
                timeout=self.timeout,
                max_retries=self.max_retries,
                temperature=self.temperature,
            )
        elif self.provider == "google":
            self.client = ChatGoogleGenerativeAI(
                model=self.model,
                google_api_key=SecretStr(self.api_key),
                timeout=self.timeout,
                max_retries=self.max_retries,
                temperature=self.temperature,
            )
        else:
            raise ValueError(f"Unsupported LLM provider: {self.provider}")

    def _messages(self, prompt: str, system_message: str | None) -> list:
        messages = []
        if system_message:
            messages.append(SystemMessage(content=system_message))
        messages.append(HumanMessage(content=prompt))
        return messages

    def generate_structured_response(
        self, prompt: str, schema: Type[T], system_message: str | None = None
    ) -> T:
        """
        Generate a response validated against a Pydantic schema.

        Uses function calling through with_structured_output(). If the provider
        cannot do structured output, the raw reply is searched for the first
        JSON object and validated against the schema.

        Raises:
            LLMGenerationError: If no valid response could be produced
        """
        messages = self._messages(prompt, system_message)
        try:
            logger.debug(f"Generating structured LLM response for schema: {schema.__name__}")
            structured_llm = self.client.with_structured_output(
                schema, method="function_calling"
            )
            result = structured_llm.invoke(messages)
            if not isinstance(result, schema):
                result = schema.model_validate(result)
            logger.debug(f"LLM structured response received: {result.model_dump_json()}")
            return result
        except Exception as e:
            logger.warning(
                f"Structured output failed ({type(e).__name__}: {e}). Trying tolerant fallback."
            )
            try:
                raw = self.client.invoke(messages)
                content = getattr(raw, "content", None) or str(raw)
                match = _JSON_OBJECT_RE.search(content)
                if not match:
                    raise ValueError("No JSON object found in fallback content.")
                return schema.model_validate(json.loads(match.group(0)))
            except Exception as e2:
                logger.error(
                    f"Failed to generate structured response from LLM after fallback: {e2}"
                )
                raise LLMGenerationError(
                    prompt=prompt, provider=self.provider, model=self.model
                ) from e
