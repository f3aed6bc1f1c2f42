"""Tests for the OpenAI tag provider."""

import json

import httpx
import pytest
import respx
from httpx import Response

from mdtag.core.config import OpenAIConfig
from mdtag.core.exceptions import EmptyResponseError, ProviderError
from mdtag.core.types import ProviderKind
from mdtag.llm.openai import OpenAIProvider

from tests.fakes.http import OPENAI_URL, make_openai_response


class TestOpenAIProviderInit:
    """Tests for OpenAIProvider initialization."""

    def test_kind_and_model(self, openai_config):
        """Should expose kind and configured model."""
        provider = OpenAIProvider(openai_config)

        assert provider.kind is ProviderKind.OPENAI
        assert provider.model == "gpt-4o"

    def test_raises_on_missing_api_key(self):
        """Should raise ValueError if API key is missing."""
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            OpenAIProvider(OpenAIConfig(api_key=""))

    def test_bearer_auth(self, openai_config):
        """Should create HTTP client with authorization header."""
        provider = OpenAIProvider(openai_config)
        assert provider._client.headers.get("authorization") == "Bearer sk-openai-test"


class TestOpenAIGenerateTags:
    """Tests for OpenAIProvider.generate_tags."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_tags(self, openai_config):
        """Should parse the message content."""
        respx.post(OPENAI_URL).mock(
            return_value=Response(200, json=make_openai_response('["devops", "cloud"]'))
        )

        provider = OpenAIProvider(openai_config)
        assert await provider.generate_tags("Body") == ["devops", "cloud"]
        await provider.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_payload(self, openai_config):
        """Should send system and user messages with limits."""
        route = respx.post(OPENAI_URL).mock(
            return_value=Response(200, json=make_openai_response('["a"]'))
        )

        provider = OpenAIProvider(openai_config)
        await provider.generate_tags("Body", [])

        payload = json.loads(route.calls.last.request.content)
        assert payload["model"] == "gpt-4o"
        assert payload["max_tokens"] == 300
        assert payload["temperature"] == 0.3
        assert [m["role"] for m in payload["messages"]] == ["system", "user"]
        assert "Existing tags" not in payload["messages"][1]["content"]
        await provider.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_lenient_answer(self, openai_config):
        """A comma-separated answer is still accepted."""
        respx.post(OPENAI_URL).mock(
            return_value=Response(200, json=make_openai_response("devops, cloud"))
        )

        provider = OpenAIProvider(openai_config)
        assert await provider.generate_tags("Body") == ["devops", "cloud"]
        await provider.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_null_content(self, openai_config):
        """Null content should raise EmptyResponseError."""
        respx.post(OPENAI_URL).mock(return_value=Response(200, json=make_openai_response(None)))

        provider = OpenAIProvider(openai_config)
        with pytest.raises(EmptyResponseError):
            await provider.generate_tags("Body")
        await provider.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error(self, openai_config):
        """A 500 should raise ProviderError."""
        respx.post(OPENAI_URL).mock(return_value=Response(500, text="boom"))

        provider = OpenAIProvider(openai_config)
        with pytest.raises(ProviderError, match="HTTP 500"):
            await provider.generate_tags("Body")
        await provider.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout(self, openai_config):
        """A transport timeout should raise ProviderError."""
        respx.post(OPENAI_URL).mock(side_effect=httpx.ReadTimeout("slow"))

        provider = OpenAIProvider(openai_config)
        with pytest.raises(ProviderError):
            await provider.generate_tags("Body")
        await provider.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_choices(self, openai_config):
        """An empty choices list should raise ProviderError."""
        respx.post(OPENAI_URL).mock(return_value=Response(200, json={"choices": []}))

        provider = OpenAIProvider(openai_config)
        with pytest.raises(ProviderError, match="Unexpected"):
            await provider.generate_tags("Body")
        await provider.close()
