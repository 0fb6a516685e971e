"""AI-assisted text generation for listing forms."""

from .draft_assistant import CategorySuggestion, ListingDraftAssistant, parse_category_suggestion
from .prompts import GenerationMode, SYSTEM_PROMPTS
from .text_generator import TextGenerationService

__all__ = [
    "CategorySuggestion",
    "ListingDraftAssistant",
    "parse_category_suggestion",
    "GenerationMode",
    "SYSTEM_PROMPTS",
    "TextGenerationService",
]
