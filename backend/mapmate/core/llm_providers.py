"""
LLM Provider Implementations
All supported providers speak the OpenAI chat-completions protocol.
"""
import httpx
import logging
from abc import ABC, abstractmethod
from typing import Optional
from mapmate.core.errors import UpstreamServiceError
from mapmate.core.logger import logs

class BaseLLMProvider(ABC):
    """Base class for all LLM providers"""

    @abstractmethod
    async def generate(
        self,
        messages: list,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: float = 30.0,
    ) -> str:
        """Generate a response from the LLM"""
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the name of the provider"""
        pass


class ChatCompletionsProvider(BaseLLMProvider):
    """Any endpoint implementing POST {base_url}/chat/completions"""

    default_base_url = "https://api.openai.com/v1"
    provider_name = "OpenAI-compatible"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = f"{(base_url or self.default_base_url).rstrip('/')}/chat/completions"
        self.transport = transport
        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

    async def generate(
        self,
        messages: list,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: float = 30.0,
    ) -> str:
        payload = {
            "model": self.model,
            "messages": messages,
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens

        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.post(
                    self.base_url,
                    json=payload,
                    headers=self.headers,
                    timeout=timeout
                )
                response.raise_for_status()
                data = response.json()
                content = data["choices"][0]["message"]["content"]
                if not isinstance(content, str):
                    raise TypeError(f"reply content is {type(content).__name__}, expected str")
                return content
            except httpx.HTTPStatusError as e:
                logs.log(logging.ERROR, f"{self.get_provider_name()} API error: {e.response.status_code} {e.response.text}")
                raise UpstreamServiceError(f"{self.get_provider_name()} request failed", details=str(e)) from e
            except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
                logs.log(logging.ERROR, f"{self.get_provider_name()} API error: {str(e)}")
                raise UpstreamServiceError(f"{self.get_provider_name()} request failed", details=str(e)) from e

    def get_provider_name(self) -> str:
        return self.provider_name


class OpenAIProvider(ChatCompletionsProvider):
    """OpenAI Provider (GPT-3.5, GPT-4, etc.)"""
    default_base_url = "https://api.openai.com/v1"
    provider_name = "OpenAI"


class GroqProvider(ChatCompletionsProvider):
    """Groq Provider (Fast inference with Llama, Mixtral, etc.)"""
    default_base_url = "https://api.groq.com/openai/v1"
    provider_name = "Groq"


class MistralProvider(ChatCompletionsProvider):
    """Mistral AI Provider"""
    default_base_url = "https://api.mistral.ai/v1"
    provider_name = "Mistral AI"
