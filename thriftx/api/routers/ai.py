"""
AI text generation routes.

`/ai/generate` is the raw (prompt, mode) call and reports failures; the
suggestion routes are advisory and always answer 200.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from thriftx.ai import ListingDraftAssistant, TextGenerationService
from thriftx.error_handling import GenerationError

from ..dependencies import get_draft_assistant, get_text_service
from ..models import (
    CategorizeRequest,
    DescriptionRequest,
    GenerateRequest,
    GenerateResponse,
    SuggestionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/ai/generate", response_model=GenerateResponse)
async def generate(
    request: GenerateRequest,
    service: TextGenerationService = Depends(get_text_service),
):
    try:
        result = await service.generate(request.prompt, request.type)
    except GenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return GenerateResponse(result=result)


@router.post("/ai/suggestions/description", response_model=SuggestionResponse)
async def suggest_description(
    request: DescriptionRequest,
    assistant: ListingDraftAssistant = Depends(get_draft_assistant),
):
    description = await assistant.suggest_description(
        title=request.title,
        category=request.category,
        item_type=request.type,
        size=request.size,
        condition=request.condition,
    )
    return SuggestionResponse(available=description is not None, description=description)


@router.post("/ai/suggestions/categorize", response_model=SuggestionResponse)
async def suggest_categorization(
    request: CategorizeRequest,
    assistant: ListingDraftAssistant = Depends(get_draft_assistant),
):
    suggestion = await assistant.suggest_categorization(request.title, request.description)
    if suggestion is None:
        return SuggestionResponse(available=False)

    return SuggestionResponse(
        available=True,
        category=suggestion.category or None,
        type=suggestion.item_type or None,
        suggested_tags=suggestion.suggested_tags,
        raw_text=suggestion.raw_text,
    )
