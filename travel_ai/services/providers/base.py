"""Common machinery for LLM provider adapters."""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage
from langchain_core.runnables import Runnable

from travel_ai.core.config import ProviderCredentials
from travel_ai.core.errors import ProviderError, RateLimitError
from travel_ai.core.parsing import message_text
from travel_ai.core.types import ProviderId

logger = logging.getLogger(__name__)

_RATE_LIMIT_MARKERS = ("429", "quota", "exhausted", "rate limit", "rate_limit")


def _status_code(exc: BaseException) -> Optional[int]:
    for candidate in (exc, getattr(exc, "response", None)):
        if candidate is None:
            continue
        for attr in ("status_code", "status", "code"):
            value = getattr(candidate, attr, None)
            if isinstance(value, int):
                return value
    return None


def classify_provider_exception(provider: ProviderId, exc: BaseException) -> ProviderError:
    """Map an SDK/transport exception to the service's error taxonomy."""

    if isinstance(exc, ProviderError):
        return exc

    message = str(exc) or type(exc).__name__
    lowered = message.lower()
    if _status_code(exc) == 429 or any(marker in lowered for marker in _RATE_LIMIT_MARKERS):
        return RateLimitError(provider, message)
    return ProviderError(provider, message)


class ProviderAdapter:
    """Translate ``(prompt, shape)`` into one provider call and return raw text.

    Subclasses decide how the shape is conveyed (constrained decoding or prompt
    instructions) and how the LangChain chat model is built. The chat model is
    created lazily so a missing key only fails when the provider is used.
    """

    provider: ProviderId

    def __init__(
        self,
        credentials: ProviderCredentials,
        *,
        chat_model: Optional[BaseChatModel] = None,
        timeout_s: float = 15.0,
    ) -> None:
        self.credentials = credentials
        self.timeout_s = timeout_s
        self._chat_model = chat_model

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(model='{self.credentials.model}', "
            f"key_source='{self.credentials.source}')"
        )

    @property
    def chat_model(self) -> BaseChatModel:
        if self._chat_model is None:
            self._chat_model = self.build_chat_model()
        return self._chat_model

    def build_chat_model(self) -> BaseChatModel:
        raise NotImplementedError

    def build_messages(self, prompt: str, shape: Any) -> List[BaseMessage]:
        return [HumanMessage(content=prompt)]

    def bind_shape(self, llm: BaseChatModel, shape: Any) -> Runnable:
        return llm

    async def complete(self, prompt: str, shape: Any) -> str:
        """Execute the provider call and return the raw response text.

        Raises:
            ProviderError: missing credentials, transport failure, or empty body.
            RateLimitError: the provider reported a rate limit or exhausted quota.
        """

        if not self.credentials.available:
            raise ProviderError(
                self.provider,
                f"No API key configured for {self.provider.label}; add one in settings.",
            )

        runnable = self.bind_shape(self.chat_model, shape)
        messages = self.build_messages(prompt, shape)
        logger.debug("Calling %s (%s)", self.provider.label, self.credentials.model)

        try:
            response = await runnable.ainvoke(messages)
        except Exception as exc:
            raise classify_provider_exception(self.provider, exc) from exc

        text = message_text(getattr(response, "content", response))
        if not text or not text.strip():
            raise ProviderError(self.provider, f"Empty response from {self.provider.label}")
        return text
