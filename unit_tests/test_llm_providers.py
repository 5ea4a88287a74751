"""Unit tests for llm_providers: request construction and error mapping."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import anthropic
import groq
import httpx
import pytest

from llm_providers import AnthropicProvider, GroqProvider, ProviderError, get_provider

GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"
ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"


def _chat_completion(content):
    """Build a minimal Groq chat completion envelope."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def groq_provider(mocker) -> GroqProvider:
    """GroqProvider whose SDK client is a MagicMock."""
    mocker.patch("llm_providers.Groq", return_value=MagicMock())
    return GroqProvider(api_key="gsk-test", model="llama-test", temperature=0.7, max_tokens=4000)


@pytest.fixture
def anthropic_provider(mocker) -> AnthropicProvider:
    """AnthropicProvider whose SDK client is a MagicMock."""
    mocker.patch("llm_providers.Anthropic", return_value=MagicMock())
    return AnthropicProvider(api_key="sk-ant-test", model="claude-test", temperature=0.7, max_tokens=4000)


# --- Groq ---

def test_groq_client_built_without_retries(mocker) -> None:
    """The SDK must not retry behind our back."""
    groq_cls = mocker.patch("llm_providers.Groq")
    GroqProvider(api_key="gsk-test")
    groq_cls.assert_called_once_with(api_key="gsk-test", max_retries=0)


def test_groq_complete_sends_prompt_and_parameters(groq_provider: GroqProvider) -> None:
    """complete should issue one chat completion with system and user messages."""
    create = groq_provider.client.chat.completions.create
    create.return_value = _chat_completion('{"twins": []}')

    text = groq_provider.complete("user prompt", "system prompt")

    assert text == '{"twins": []}'
    create.assert_called_once_with(
        messages=[
            {"role": "system", "content": "system prompt"},
            {"role": "user", "content": "user prompt"},
        ],
        model="llama-test",
        temperature=0.7,
        max_tokens=4000,
    )


def test_groq_complete_returns_empty_string_for_null_content(groq_provider: GroqProvider) -> None:
    """A null message body should come back as an empty string."""
    groq_provider.client.chat.completions.create.return_value = _chat_completion(None)
    assert groq_provider.complete("p", "s") == ""


def test_groq_complete_rejects_empty_choices(groq_provider: GroqProvider) -> None:
    """An envelope without choices is unusable."""
    groq_provider.client.chat.completions.create.return_value = SimpleNamespace(choices=[])
    with pytest.raises(ProviderError, match="Invalid response structure"):
        groq_provider.complete("p", "s")


def test_groq_status_error_becomes_provider_error(groq_provider: GroqProvider) -> None:
    """Non-2xx responses should surface as ProviderError with the status code."""
    request = httpx.Request("POST", GROQ_URL)
    response = httpx.Response(401, request=request)
    groq_provider.client.chat.completions.create.side_effect = groq.APIStatusError(
        "Invalid API Key", response=response, body=None
    )

    with pytest.raises(ProviderError, match="401"):
        groq_provider.complete("p", "s")
    assert groq_provider.client.chat.completions.create.call_count == 1


def test_groq_connection_error_becomes_provider_error(groq_provider: GroqProvider) -> None:
    """Network failures should surface as ProviderError."""
    groq_provider.client.chat.completions.create.side_effect = groq.APIConnectionError(
        request=httpx.Request("POST", GROQ_URL)
    )
    with pytest.raises(ProviderError, match="Groq API request failed"):
        groq_provider.complete("p", "s")


def test_groq_without_key_raises_before_any_request() -> None:
    """Missing keys are reported without building a client."""
    provider = GroqProvider(api_key=None)
    assert provider.client is None
    assert provider.is_configured is False
    with pytest.raises(ProviderError, match="not configured"):
        provider.complete("p", "s")


# --- Anthropic ---

def test_anthropic_complete_sends_prompt_and_parameters(anthropic_provider: AnthropicProvider) -> None:
    """complete should issue one messages request with a system prompt."""
    create = anthropic_provider.client.messages.create
    create.return_value = SimpleNamespace(content=[SimpleNamespace(type="text", text='{"twins": []}')])

    text = anthropic_provider.complete("user prompt", "system prompt")

    assert text == '{"twins": []}'
    create.assert_called_once_with(
        model="claude-test",
        max_tokens=4000,
        temperature=0.7,
        system="system prompt",
        messages=[{"role": "user", "content": "user prompt"}],
    )


def test_anthropic_complete_joins_text_blocks_only(anthropic_provider: AnthropicProvider) -> None:
    """Only text blocks contribute to the reply."""
    anthropic_provider.client.messages.create.return_value = SimpleNamespace(
        content=[
            SimpleNamespace(type="thinking", thinking="hmm"),
            SimpleNamespace(type="text", text='{"twins": '),
            SimpleNamespace(type="text", text="[]}"),
        ]
    )
    assert anthropic_provider.complete("p", "s") == '{"twins": []}'


def test_anthropic_status_error_becomes_provider_error(anthropic_provider: AnthropicProvider) -> None:
    """Non-2xx responses should surface as ProviderError with the status code."""
    request = httpx.Request("POST", ANTHROPIC_URL)
    response = httpx.Response(529, request=request)
    anthropic_provider.client.messages.create.side_effect = anthropic.APIStatusError(
        "Overloaded", response=response, body=None
    )
    with pytest.raises(ProviderError, match="529"):
        anthropic_provider.complete("p", "s")


def test_anthropic_connection_error_becomes_provider_error(anthropic_provider: AnthropicProvider) -> None:
    """Network failures should surface as ProviderError."""
    anthropic_provider.client.messages.create.side_effect = anthropic.APIConnectionError(
        request=httpx.Request("POST", ANTHROPIC_URL)
    )
    with pytest.raises(ProviderError, match="Anthropic API request failed"):
        anthropic_provider.complete("p", "s")


def test_anthropic_without_key_raises() -> None:
    """Missing keys are reported without building a client."""
    provider = AnthropicProvider(api_key=None)
    with pytest.raises(ProviderError, match="not configured"):
        provider.complete("p", "s")


# --- Factory ---

@pytest.mark.parametrize(
    "name, expected",
    [("groq", GroqProvider), ("anthropic", AnthropicProvider), (" Anthropic ", AnthropicProvider)],
)
def test_get_provider_by_name(mocker, name: str, expected: type) -> None:
    """get_provider should build the named provider, ignoring case and whitespace."""
    mocker.patch("llm_providers.Groq")
    mocker.patch("llm_providers.Anthropic")
    assert isinstance(get_provider(name), expected)


def test_get_provider_defaults_to_configured_provider(mocker) -> None:
    """Without a name, the configured provider is used."""
    mocker.patch("llm_providers.Anthropic")
    mocker.patch("llm_providers.config.PROVIDER", "anthropic")
    assert isinstance(get_provider(), AnthropicProvider)


def test_get_provider_rejects_unknown_name() -> None:
    """Unknown providers should raise ValueError naming the choices."""
    with pytest.raises(ValueError, match="anthropic, groq"):
        get_provider("openai")
