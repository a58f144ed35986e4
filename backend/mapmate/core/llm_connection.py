import logging
from typing import List, Optional
from mapmate.core.config import settings
from mapmate.core.logger import logs
from mapmate.models.base_model import Role
from mapmate.core.llm_providers import (
    BaseLLMProvider,
    OpenAIProvider,
    GroqProvider,
    MistralProvider
)

PROVIDERS = {
    "openai": OpenAIProvider,
    "groq": GroqProvider,
    "mistral": MistralProvider,
}

class LLMService:
    def __init__(self, provider: Optional[BaseLLMProvider] = None):
        self.provider = provider or self._initialize_provider()
        logs.log(logging.INFO, f"🤖 LLM Provider initialized: {self.provider.get_provider_name()}")

    def _initialize_provider(self) -> BaseLLMProvider:
        """Initialize the selected LLM provider based on settings"""
        name = settings.LLM_PROVIDER.lower()
        provider_cls = PROVIDERS.get(name)
        if provider_cls is None:
            logs.log(logging.WARNING, f"Unknown provider '{name}', defaulting to OpenAI")
            provider_cls = OpenAIProvider
        return provider_cls(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            base_url=settings.LLM_BASE_URL
        )

    async def chat(self, message: str, history: List[str] = None) -> str:
        """
        Continues a conversation. History entries alternate user/assistant,
        starting with the user.
        """
        messages = [
            {
                "role": Role.USER.value if index % 2 == 0 else Role.ASSISTANT.value,
                "content": msg
            }
            for index, msg in enumerate(history or [])
        ]
        messages.append({"role": Role.USER.value, "content": message})

        logs.log(logging.INFO, f"Chat request with {len(messages) - 1} history messages")
        content = await self.provider.generate(messages, temperature=0.9, max_tokens=1000)
        return content.strip()

    async def extract_locations(self, text: str) -> List[str]:
        """Asks the model for a comma-separated list of the places named in text."""
        messages = [
            {"role": Role.SYSTEM.value, "content": "You are a helpful assistant that extracts location names from text."},
            {
                "role": Role.USER.value,
                "content": (
                    "Extract all location names from the following text. "
                    f"Respond with only a comma-separated list of locations, nothing else: \"{text}\""
                )
            }
        ]

        content = await self.provider.generate(messages, temperature=0.3)
        locations = [loc.strip() for loc in content.strip().split(",")]
        locations = [loc for loc in locations if loc]
        logs.log(logging.INFO, f"Extracted {len(locations)} locations")
        return locations

    async def generate_summary(self, lat: float, lng: float) -> str:
        prompt = (
            f"Provide a brief summary of the location at latitude {lat} and longitude {lng}. "
            "Include information about local business to the coordinates, the sectors surrounding "
            "the areas and any interesting places well known by the locals."
        )
        messages = [{"role": Role.USER.value, "content": prompt}]

        logs.log(logging.INFO, f"Generating summary for {lat}, {lng}")
        return await self.provider.generate(messages, max_tokens=4000)

# Singleton instance
llm_client = LLMService()

# Dependency for FastAPI
def get_llm_service() -> LLMService:
    return llm_client
