"""
Generative text service using Claude.

Given a prompt and a mode, returns generated text or raises GenerationError.
The result is advisory only: it pre-fills listing form fields.
"""

import logging
from typing import Optional

import anthropic

from thriftx.config import AIConfig
from thriftx.error_handling import GenerationError
from .prompts import GenerationMode, SYSTEM_PROMPTS

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response generated"


class TextGenerationService:
    """Generate listing copy, categorization hints and recommendations."""

    def __init__(
        self,
        config: Optional[AIConfig] = None,
        client: Optional[anthropic.AsyncAnthropic] = None
    ):
        self.config = config or AIConfig()
        if client is None and self.config.api_key:
            client = anthropic.AsyncAnthropic(api_key=self.config.api_key)
        self.client = client

    @property
    def available(self) -> bool:
        return self.client is not None

    async def generate(self, prompt: str, mode=GenerationMode.DESCRIPTION) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: Item details or user preferences
            mode: GenerationMode (or its string value); unknown values fall
                back to description

        Returns:
            Generated text

        Raises:
            GenerationError: If the service is not configured, the prompt is
                blank, or the API call fails
        """
        if not self.available:
            raise GenerationError("AI API key not configured")
        if not prompt or not prompt.strip():
            raise GenerationError("Prompt cannot be empty")

        mode = _parse_mode(mode)

        try:
            response = await self.client.messages.create(
                model=self.config.model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                system=SYSTEM_PROMPTS[mode],
                messages=[{"role": "user", "content": prompt}]
            )
        except anthropic.APIError as e:
            logger.error(f"Text generation failed ({mode.value}): {e}")
            raise GenerationError(f"AI API error: {e}") from e

        text = _first_text(response)
        logger.debug(f"Generated {len(text)} characters for mode {mode.value}")
        return text


def _parse_mode(mode) -> GenerationMode:
    try:
        return GenerationMode(mode)
    except ValueError:
        return GenerationMode.DESCRIPTION


def _first_text(response) -> str:
    for block in getattr(response, "content", None) or []:
        text = getattr(block, "text", None)
        if text and text.strip():
            return text.strip()
    return NO_RESPONSE
