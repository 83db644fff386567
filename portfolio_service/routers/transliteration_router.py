# routers/transliteration_router.py

from fastapi import APIRouter, Depends, Query

from ..schemas.transliteration_schemas import (
    ApplySuggestionRequest,
    DictionaryStatus,
    SuggestionResponse,
    TransliterateRequest,
    TransliterateResponse,
)
from ..services.transliteration_service import TransliterationService
from ..utils.dependencies import get_transliteration_service

router = APIRouter(prefix="/tools/nepali-unicode", tags=["transliteration"])


@router.post("/transliterate", response_model=TransliterateResponse)
async def transliterate(
    request: TransliterateRequest,
    service: TransliterationService = Depends(get_transliteration_service),
) -> TransliterateResponse:
    """Convert romanised Nepali to Devanagari; text in parentheses is kept as typed"""
    return service.transliterate(request.text)


@router.get("/suggest", response_model=SuggestionResponse)
async def suggest(
    prefix: str = Query("", description="Current input; a trailing space completes the last word"),
    service: TransliterationService = Depends(get_transliteration_service),
) -> SuggestionResponse:
    return service.suggest(prefix)


@router.post("/apply", response_model=TransliterateResponse)
async def apply_suggestion(
    request: ApplySuggestionRequest,
    service: TransliterationService = Depends(get_transliteration_service),
) -> TransliterateResponse:
    """Swap the last word for a chosen suggestion"""
    return service.apply(request)


@router.get("/status", response_model=DictionaryStatus)
async def dictionary_status(
    service: TransliterationService = Depends(get_transliteration_service),
) -> DictionaryStatus:
    return service.status()
