# services/transliteration_service.py

import asyncio
import json
from pathlib import Path
from typing import List, Optional, Union

from ..core.config import settings
from ..core import transliterator
from ..core.trie import Trie
from ..schemas.transliteration_schemas import (
    ApplyMode,
    ApplySuggestionRequest,
    DictionaryStatus,
    SuggestionResponse,
    TransliterateResponse,
)
from common.logger import LoggerFactory, LoggerType, LogLevel

DEFAULT_DICTIONARY_PATH = Path(__file__).resolve().parent.parent / "data" / "nepali_words.json"
CHUNK_SIZE = 1000


class TransliterationService:
    """
    Romanised Nepali to Unicode conversion with trie-backed suggestions.
    """

    def __init__(self, dictionary_path: Optional[str] = None, use_itrans: bool = True):
        """
        Initialize transliteration service

        Args:
            dictionary_path: JSON word list, defaults to the bundled dictionary
            use_itrans: Use ITRANS rules for conversion and dictionary keys
        """
        self.dictionary_path = Path(dictionary_path) if dictionary_path else DEFAULT_DICTIONARY_PATH
        self.use_itrans = use_itrans
        self.trie = Trie()
        self.words_loaded = 0
        self.total_words = 0
        self.loaded = False
        self.logger = LoggerFactory.get_logger(
            name="transliteration-service",
            logger_type=LoggerType.STANDARD,
            level=LogLevel.INFO,
            file_level=LogLevel.DEBUG,
            log_file=f"{settings.log_file_path}transliteration_service.log",
        )

        for key, word in transliterator.WORD_MAPPINGS.items():
            self.trie.insert(key.lower(), word)

    @staticmethod
    def read_words(path: Union[str, Path]) -> List[str]:
        """Read a list or ``{"nepaliWords": [...]}`` JSON document"""
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        words = payload if isinstance(payload, list) else payload.get("nepaliWords", [])
        return [w for w in words if isinstance(w, str) and w.strip()]

    async def load_dictionary(self, chunk_size: int = CHUNK_SIZE) -> int:
        """
        Insert the dictionary into the trie in chunks, yielding between chunks

        Returns:
            Number of words inserted
        """
        try:
            words = self.read_words(self.dictionary_path)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Could not load dictionary {self.dictionary_path}: {e}")
            return 0

        self.total_words = len(words)
        for start in range(0, len(words), chunk_size):
            for word in words[start : start + chunk_size]:
                self.add_word(word)
            self.words_loaded += len(words[start : start + chunk_size])
            await asyncio.sleep(0)

        self.loaded = True
        self.logger.info(f"Loaded {self.words_loaded} dictionary words ({len(self.trie)} keys)")
        return self.words_loaded

    def add_word(self, word: str) -> None:
        self.trie.insert(word.lower(), word)
        if self.use_itrans:
            try:
                self.trie.insert(transliterator.to_itrans(word).lower(), word)
            except (ValueError, KeyError) as e:
                self.logger.debug(f"Could not romanise {word}: {e}")

    def transliterate(self, text: str) -> TransliterateResponse:
        return TransliterateResponse(
            text=text, unicode=transliterator.transliterate(text, self.use_itrans)
        )

    def suggest(self, text: str) -> SuggestionResponse:
        """
        Suggestions for the word being typed

        A trailing space means the previous word is complete: up to two
        "did you mean" matches are returned for it and no completions.
        """
        previous = transliterator.token_before_trailing_space(text)
        if previous is not None:
            did_you_mean = (
                self.trie.search(previous, transliterator.DID_YOU_MEAN_LIMIT) if previous else []
            )
            return SuggestionResponse(prefix=text, did_you_mean=did_you_mean)

        last = transliterator.last_token(text)
        suggestions = self.trie.search(last, transliterator.SUGGESTION_LIMIT) if last else []
        return SuggestionResponse(prefix=text, suggestions=suggestions)

    def apply(self, request: ApplySuggestionRequest) -> TransliterateResponse:
        """Replace the last (or just completed) word and re-transliterate"""
        text = request.text
        if request.mode == ApplyMode.DID_YOU_MEAN:
            text = text.rstrip()
        new_text = transliterator.replace_last_word(text, request.suggestion)
        return self.transliterate(new_text)

    def status(self) -> DictionaryStatus:
        return DictionaryStatus(
            words_loaded=self.words_loaded,
            total_words=self.total_words,
            loaded=self.loaded,
            itrans_enabled=self.use_itrans,
        )
