"""
Listing draft assistant.

Wraps the text generation service for the add-item form. Every method is
advisory: failures are logged and come back as None, so an unavailable AI
service never blocks listing creation.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from thriftx.error_handling import GenerationError
from .prompts import GenerationMode, build_categorize_details, build_item_details
from .text_generator import TextGenerationService

logger = logging.getLogger(__name__)


@dataclass
class CategorySuggestion:
    """Parsed reply of the categorize mode.

    Attributes:
        category: Suggested category name, empty if none
        item_type: Suggested item type, empty if none
        suggested_tags: Suggested tags
        raw_text: The model's reply as received
    """
    category: str = ""
    item_type: str = ""
    suggested_tags: List[str] = field(default_factory=list)
    raw_text: str = ""

    @property
    def parsed(self) -> bool:
        return bool(self.category or self.item_type or self.suggested_tags)


class ListingDraftAssistant:
    """Pre-fills add-item form fields with generated text."""

    def __init__(self, service: TextGenerationService):
        self.service = service

    async def suggest_description(
        self,
        title: str = "",
        category: str = "",
        item_type: str = "",
        size: str = "",
        condition: str = ""
    ) -> Optional[str]:
        """
        Generate a description from the form fields.

        Returns:
            Description text, or None without a title/category or on failure
        """
        if not title and not category:
            logger.info("Description requested without title or category")
            return None

        prompt = build_item_details(title, category, item_type, size, condition)
        return await self._generate(prompt, GenerationMode.DESCRIPTION)

    async def suggest_categorization(
        self,
        title: str,
        description: str = ""
    ) -> Optional[CategorySuggestion]:
        """
        Ask for category, type and tags for an item.

        Returns:
            CategorySuggestion (only raw_text set when the reply is not JSON),
            or None without a title or on failure
        """
        if not title:
            logger.info("Categorization requested without title")
            return None

        text = await self._generate(build_categorize_details(title, description), GenerationMode.CATEGORIZE)
        if text is None:
            return None
        return parse_category_suggestion(text)

    async def recommend(self, preferences: str) -> Optional[str]:
        return await self._generate(preferences, GenerationMode.RECOMMEND)

    async def _generate(self, prompt: str, mode: GenerationMode) -> Optional[str]:
        try:
            return await self.service.generate(prompt, mode)
        except GenerationError as e:
            logger.warning(f"AI suggestion unavailable ({mode.value}): {e}")
            return None


def parse_category_suggestion(text: str) -> CategorySuggestion:
    """Parse a categorize reply, tolerating markdown code fences."""
    body = text.strip()
    if '```json' in body:
        body = body.split('```json')[1].split('```')[0].strip()
    elif '```' in body:
        body = body.split('```')[1].split('```')[0].strip()

    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        return CategorySuggestion(raw_text=text)

    if not isinstance(data, dict):
        return CategorySuggestion(raw_text=text)

    tags = data.get("suggestedTags") or []
    if not isinstance(tags, list):
        tags = []

    return CategorySuggestion(
        category=str(data.get("category") or ""),
        item_type=str(data.get("type") or ""),
        suggested_tags=[str(tag).strip() for tag in tags if str(tag).strip()],
        raw_text=text,
    )
