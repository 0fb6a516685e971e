"""
System prompts for the generative text service.
"""

from enum import Enum


class GenerationMode(str, Enum):
    """What the generated text is for"""
    DESCRIPTION = "description"
    CATEGORIZE = "categorize"
    RECOMMEND = "recommend"


SYSTEM_PROMPTS = {
    GenerationMode.DESCRIPTION: (
        "You are a fashion expert helping users create compelling descriptions for clothing "
        "items in a sustainable fashion marketplace. Write engaging, detailed descriptions that "
        "highlight the item's style, condition, and appeal to potential swappers."
    ),
    GenerationMode.CATEGORIZE: (
        "You are a clothing categorization expert. Analyze the item details and suggest the most "
        "appropriate category, type, size, and condition. Respond with a JSON object containing: "
        '{"category": "", "type": "", "suggestedTags": []}'
    ),
    GenerationMode.RECOMMEND: (
        "You are a personal stylist. Based on the user's style preferences and item details, "
        "suggest complementary clothing items they might want to swap for. Be specific about "
        "styles, colors, and occasions."
    ),
}


def build_item_details(
    title: str = "",
    category: str = "",
    item_type: str = "",
    size: str = "",
    condition: str = ""
) -> str:
    """Summarize add-item form fields for the description prompt."""
    return f"Title: {title}, Category: {category}, Type: {item_type}, Size: {size}, Condition: {condition}"


def build_categorize_details(title: str, description: str = "") -> str:
    return f"Item: {title}, Current description: {description}"
