"""AI text generation data models"""

from pydantic import BaseModel
from typing import List, Optional


class GenerateRequest(BaseModel):
    """Prompt plus mode tag (description, categorize or recommend)"""
    prompt: str
    type: str = "description"


class GenerateResponse(BaseModel):
    result: str


class DescriptionRequest(BaseModel):
    title: str = ""
    category: str = ""
    type: str = ""
    size: str = ""
    condition: str = ""


class CategorizeRequest(BaseModel):
    title: str
    description: str = ""


class SuggestionResponse(BaseModel):
    """Advisory suggestion; every field is empty when the AI is unavailable"""
    available: bool
    description: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    suggested_tags: List[str] = []
    raw_text: Optional[str] = None
