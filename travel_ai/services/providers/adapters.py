"""Concrete adapters for the Gemini, OpenAI and Grok chat backends."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Type

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_core.runnables import Runnable

from travel_ai.core.config import ApiSettings, resolve_credentials
from travel_ai.core.types import ProviderId
from travel_ai.services.providers.base import ProviderAdapter
from travel_ai.services.providers.schemas import schema_instructions, shape_json_schema

JSON_SYSTEM_PROMPT = "You are a helpful travel assistant. You must output valid JSON."
XAI_BASE_URL = "https://api.x.ai/v1"


class GeminiAdapter(ProviderAdapter):
    """Gemini accepts the schema directly and decodes under that constraint."""

    provider = ProviderId.GEMINI

    def build_chat_model(self) -> BaseChatModel:
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=self.credentials.model,
            google_api_key=self.credentials.api_key,
            temperature=0.7,
            timeout=self.timeout_s,
        )

    def bind_shape(self, llm: BaseChatModel, shape: Any) -> Runnable:
        return llm.bind(
            response_mime_type="application/json",
            response_schema=shape_json_schema(shape),
        )


class _TextInstructionAdapter(ProviderAdapter):
    """Providers that only see the schema as text appended to the prompt."""

    def build_messages(self, prompt: str, shape: Any) -> List[BaseMessage]:
        return [
            SystemMessage(content=JSON_SYSTEM_PROMPT),
            HumanMessage(content=f"{prompt.strip()}\n\n{schema_instructions(shape)}"),
        ]


class OpenAIAdapter(_TextInstructionAdapter):
    provider = ProviderId.OPENAI

    def build_chat_model(self) -> BaseChatModel:
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=self.credentials.model,
            api_key=self.credentials.api_key,
            timeout=self.timeout_s,
            max_retries=0,
        )

    def bind_shape(self, llm: BaseChatModel, shape: Any) -> Runnable:
        return llm.bind(response_format={"type": "json_object"})


class GrokAdapter(_TextInstructionAdapter):
    provider = ProviderId.GROK

    def build_chat_model(self) -> BaseChatModel:
        from langchain_xai import ChatXAI

        return ChatXAI(
            model=self.credentials.model,
            api_key=self.credentials.api_key,
            xai_api_base=XAI_BASE_URL,
            timeout=self.timeout_s,
            max_retries=0,
        )


ADAPTER_TYPES: Dict[ProviderId, Type[ProviderAdapter]] = {
    ProviderId.GEMINI: GeminiAdapter,
    ProviderId.OPENAI: OpenAIAdapter,
    ProviderId.GROK: GrokAdapter,
}


def build_adapters(
    settings: ApiSettings,
    overrides: Optional[Mapping[str, str]] = None,
) -> Dict[ProviderId, ProviderAdapter]:
    """Create one adapter per provider with credentials resolved up front."""

    return {
        provider: adapter_type(
            resolve_credentials(settings, provider, overrides),
            timeout_s=settings.http_timeout_s,
        )
        for provider, adapter_type in ADAPTER_TYPES.items()
    }
