"""Base agent with shared LLM calling logic."""

from __future__ import annotations

import logging

import openai

from solverelay.config import Config
from solverelay.errors import UpstreamCallFailure
from solverelay.prompts import CONNECTIVITY_PROMPT

log = logging.getLogger(__name__)


class BaseAgent:
    def __init__(self, config: Config, client: openai.OpenAI | None = None) -> None:
        self.config = config
        self._client = client or config.create_openai_client()

    def _call_llm(
        self,
        user: str,
        model: str,
        temperature: float,
        max_tokens: int,
        system: str | None = None,
        images: list[str] | None = None,
    ) -> str:
        # Build user message content: text-only or multimodal with images
        if images:
            user_content = build_vision_content(user, images)
        else:
            user_content = user
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": user_content})

        log.info("Calling %s (%s, %d prompt chars)", model, self.config.llm_provider, len(user))
        try:
            response = self._client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                top_p=self.config.top_p,
            )
        except openai.AuthenticationError as e:
            raise UpstreamCallFailure(UpstreamCallFailure.AUTH, str(e)) from e
        except openai.RateLimitError as e:
            raise UpstreamCallFailure(UpstreamCallFailure.RATE_LIMIT, str(e)) from e
        except openai.OpenAIError as e:
            raise UpstreamCallFailure(UpstreamCallFailure.UPSTREAM, str(e)) from e
        if not response.choices:
            raise UpstreamCallFailure(UpstreamCallFailure.UPSTREAM, f"{model} returned no choices")
        return response.choices[0].message.content or ""

    def ping(self) -> str:
        """Minimal completion used to check provider connectivity."""
        return self._call_llm(
            user=CONNECTIVITY_PROMPT,
            model=self.config.solve_model,
            temperature=0,
            max_tokens=10,
        )


def to_data_url(image_data: str) -> str:
    """Accept a data URL or bare base64 PNG payload and return a data URL."""
    if image_data.startswith("data:") and ";base64," in image_data:
        return image_data
    if ";base64," in image_data:
        image_data = image_data.split(";base64,")[-1]
    return f"data:image/png;base64,{image_data}"


def build_vision_content(text: str, images: list[str]) -> list[dict]:
    """Build a multimodal content array with text + base64-encoded images."""
    parts: list[dict] = [{"type": "text", "text": text}]
    for image in images:
        if not image:
            continue
        parts.append({
            "type": "image_url",
            "image_url": {"url": to_data_url(image)},
        })
    return parts
