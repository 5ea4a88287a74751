import logging

import anthropic
import groq
from anthropic import Anthropic
from groq import Groq

import config

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised when the LLM provider cannot produce a response."""


class LLMProvider:
    """
    Common interface for the LLM APIs PlotTwin can talk to.

    Each call to `complete` issues exactly one request. SDK clients are built
    with `max_retries=0`; a failed request is reported, never repeated.
    """

    name = "base"
    display_name = "LLM"

    def __init__(self, api_key: str | None, model: str, temperature: float = config.TEMPERATURE, max_tokens: int = config.MAX_TOKENS):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def complete(self, prompt: str, system_prompt: str) -> str:
        """
        Sends one prompt to the provider.

        Args:
            prompt: The user's prompt.
            system_prompt: The system message to set the AI's role.

        Returns:
            The generated text, or an empty string if the provider returned none.

        Raises:
            ProviderError: missing API key, API/connection failure or an
                unusable response envelope.
        """
        raise NotImplementedError


class GroqProvider(LLMProvider):
    name = "groq"
    display_name = "Groq"

    def __init__(self, api_key: str | None = config.GROQ_API_KEY, model: str = config.GROQ_MODEL, **kwargs):
        super().__init__(api_key, model, **kwargs)
        # Initialize client only if key exists
        self.client = Groq(api_key=api_key, max_retries=0) if api_key else None
        if self.client is None:
            logger.warning("Groq client not initialized due to missing API key.")

    def complete(self, prompt: str, system_prompt: str) -> str:
        if not self.client:
            raise ProviderError("Groq API key not configured.")

        logger.info(f"Calling Groq model '{self.model}' (prompt: {len(prompt)} chars)")
        try:
            chat_completion = self.client.chat.completions.create(
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except groq.APIStatusError as e:
            logger.error(f"Groq returned HTTP {e.status_code}: {e.message}")
            raise ProviderError(f"Groq API request failed ({e.status_code}): {e.message}") from e
        except groq.APIError as e:
            logger.error(f"An API error occurred calling Groq: {e}")
            raise ProviderError(f"Groq API request failed: {e}") from e

        # Check for valid response structure
        if not chat_completion.choices or not chat_completion.choices[0].message:
            logger.error(f"Invalid response received: {chat_completion}")
            raise ProviderError("Invalid response structure from Groq.")
        return chat_completion.choices[0].message.content or ""


class AnthropicProvider(LLMProvider):
    name = "anthropic"
    display_name = "Anthropic"

    def __init__(self, api_key: str | None = config.ANTHROPIC_API_KEY, model: str = config.ANTHROPIC_MODEL, **kwargs):
        super().__init__(api_key, model, **kwargs)
        self.client = Anthropic(api_key=api_key, max_retries=0) if api_key else None
        if self.client is None:
            logger.warning("Anthropic client not initialized due to missing API key.")

    def complete(self, prompt: str, system_prompt: str) -> str:
        if not self.client:
            raise ProviderError("Anthropic API key not configured.")

        logger.info(f"Calling Anthropic model '{self.model}' (prompt: {len(prompt)} chars)")
        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIStatusError as e:
            logger.error(f"Anthropic returned HTTP {e.status_code}: {e.message}")
            raise ProviderError(f"Anthropic API request failed ({e.status_code}): {e.message}") from e
        except anthropic.APIError as e:
            logger.error(f"An API error occurred calling Anthropic: {e}")
            raise ProviderError(f"Anthropic API request failed: {e}") from e

        if message.content is None:
            logger.error(f"Invalid response received: {message}")
            raise ProviderError("Invalid response structure from Anthropic.")
        # Only text blocks carry the generated answer
        return "".join(block.text for block in message.content if getattr(block, "type", None) == "text")


PROVIDERS = {
    GroqProvider.name: GroqProvider,
    AnthropicProvider.name: AnthropicProvider,
}


def get_provider(name: str | None = None) -> LLMProvider:
    """Builds the provider called `name`, defaulting to the configured one."""
    provider_name = (name or config.PROVIDER).strip().lower()
    try:
        provider_cls = PROVIDERS[provider_name]
    except KeyError:
        raise ValueError(f"Unknown LLM provider '{provider_name}'. Choose one of: {', '.join(sorted(PROVIDERS))}") from None
    return provider_cls()
