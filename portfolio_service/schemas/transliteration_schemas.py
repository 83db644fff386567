# schemas/transliteration_schemas.py

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class TransliterateRequest(BaseModel):
    text: str = Field("", description="Romanised Nepali input")


class TransliterateResponse(BaseModel):
    text: str
    unicode: str = Field(..., description="Devanagari output")


class SuggestionResponse(BaseModel):
    prefix: str
    suggestions: List[str] = Field(default_factory=list, description="Completions for the last word")
    did_you_mean: List[str] = Field(
        default_factory=list, description="Corrections for the word just completed"
    )


class ApplyMode(str, Enum):
    SUGGESTION = "suggestion"
    DID_YOU_MEAN = "did_you_mean"


class ApplySuggestionRequest(BaseModel):
    text: str = ""
    suggestion: str = Field(..., min_length=1)
    mode: ApplyMode = ApplyMode.SUGGESTION


class DictionaryStatus(BaseModel):
    words_loaded: int
    total_words: int
    loaded: bool
    itrans_enabled: bool
