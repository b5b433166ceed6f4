from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, Protocol, Set, Union

from wordfreq import zipf_frequency

from .config import LOGGER_NAME_DICT

logger = logging.getLogger(LOGGER_NAME_DICT)


class WordOracle(Protocol):
    """Anything that can tell whether a word is real English."""

    def is_valid_english_word(self, word: str) -> bool: ...


def read_word_file(path: Union[str, Path]) -> Set[str]:
    text = Path(path).read_text(encoding='utf-8')
    return {line.strip().lower() for line in text.splitlines() if line.strip()}


class FrequencyDictionary:
    """
    English words as known to wordfreq.

    A word counts as real when it is purely alphabetic and its Zipf frequency
    reaches ``min_zipf``. Zipf 1.0 is the floor of wordfreq's large English
    list; raising it drops rarer entries.
    """

    def __init__(self, min_zipf: float = 1.5, lang: str = 'en'):
        self.min_zipf = min_zipf
        self.lang = lang
        logger.debug(f"Using wordfreq dictionary ({lang}, min zipf {min_zipf})")

    def is_valid_english_word(self, word: str) -> bool:
        if not word or not word.isalpha():
            return False
        return zipf_frequency(word.lower(), self.lang) >= self.min_zipf


class DictionaryService:
    """Fixed word list, e.g. loaded from /usr/share/dict/words."""

    def __init__(self, words: Iterable[str]):
        # Store lowercase words
        self._words: Set[str] = {w.strip().lower() for w in words if w.strip()}
        logger.debug(f"Dictionary loaded with {len(self._words)} words")

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'DictionaryService':
        logger.info(f"Loading dictionary from {path}")
        return cls(read_word_file(path))

    def is_valid_english_word(self, word: str) -> bool:
        if not word:
            return False
        return word.lower() in self._words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_valid_english_word(word)

    def __len__(self) -> int:
        return len(self._words)
