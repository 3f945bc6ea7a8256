"""Chat assistant backed by an OpenAI-compatible chat-completions API (OpenRouter).

Every request carries the same system prompt, which limits the model to
questions about the door hardware sold by the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from ..errors import Result, upstream_error, validation_error
from ..logging import get_logger

logger = get_logger("storefront.assistant")

SYSTEM_PROMPT = (
    "You are an AI assistant that ONLY answers questions about the products and services "
    "available on this home accessories website. The website sells door hardware including "
    "locks, handles, hinges, door closers, and security solutions. You must NOT answer any "
    "questions outside of this scope - including general knowledge, advice about other "
    "products, or any topics not related to what this website offers. If asked about "
    "anything outside the website's products and services, politely say you can only help "
    "with questions about the door hardware and security products available on this site. "
    "Be helpful and knowledgeable only about the specific products listed on the website."
)


@dataclass
class AssistantSettings:
    """Settings for the chat-completions provider."""

    api_key: str
    base_url: str = "https://openrouter.ai/api/v1"
    model: str = "openai/gpt-4o-mini"
    timeout: float = 60.0
    max_tokens: int = 1000
    temperature: float = 0.7
    referer: str = "https://home-accessories.com"
    title: str = "Home Accessories AI Assistant"


class ChatAssistant:
    def __init__(self, settings: AssistantSettings) -> None:
        self.settings = settings
        self.settings.base_url = settings.base_url.rstrip("/")

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.referer,
            "X-Title": self.settings.title,
        }

    def build_payload(self, message: str) -> Dict[str, Any]:
        return {
            "model": self.settings.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": message},
            ],
            "max_tokens": self.settings.max_tokens,
            "temperature": self.settings.temperature,
        }

    def reply(self, message: Optional[str]) -> Result[str]:
        if not message or not message.strip():
            return Result.failure(validation_error("Message is required"))

        url = f"{self.settings.base_url}/chat/completions"
        try:
            with httpx.Client(timeout=self.settings.timeout) as client:
                logger.debug("chat_completion_request", url=url, model=self.settings.model)
                response = client.post(url, json=self.build_payload(message), headers=self._headers())
        except httpx.HTTPError as exc:
            logger.error("chat_completion_unreachable", url=url, error=str(exc))
            return Result.failure(upstream_error("Internal server error", remote=False))

        if response.status_code >= 400:
            logger.error(
                "chat_completion_rejected",
                status_code=response.status_code,
                body=response.text[:500],
            )
            return Result.failure(upstream_error("Failed to get AI response", remote=True))

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error("chat_completion_malformed", error=str(exc))
            return Result.failure(upstream_error("Failed to get AI response", remote=True))

        logger.info("chat_completion_succeeded", model=self.settings.model, reply_length=len(str(content)))
        return Result.success(str(content))


__all__ = ["AssistantSettings", "ChatAssistant", "SYSTEM_PROMPT"]
