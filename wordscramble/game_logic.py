"""
Core rules of the word scramble game.

State lives in an immutable ``GameState`` value. Every operation takes a state
and returns a new one, so the rules can be exercised without any server.
``WordGame`` wraps that value for callers that want a mutable session.
"""
from __future__ import annotations
import logging
import random
from collections import Counter
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple, Union

from .config import DEFAULT_ROOT_WORD, LOGGER_NAME_GAME
from .dictionary import WordOracle

logger = logging.getLogger(LOGGER_NAME_GAME)


class RootWordSourceError(RuntimeError):
    """The root word list could not be loaded; the game cannot start."""


class RejectionReason(str, Enum):
    IDENTICAL_TO_ROOT = 'IdenticalToRoot'
    NOT_A_REAL_WORD = 'NotARealWord'
    ALREADY_USED = 'AlreadyUsed'
    NOT_COMPOSABLE = 'NotComposable'


# (title, message) shown to the player; message may reference the root word
REJECTION_TEXT: Dict[RejectionReason, Tuple[str, str]] = {
    RejectionReason.IDENTICAL_TO_ROOT: ('Word is the same!', 'Type in a derivative of the word.'),
    RejectionReason.NOT_A_REAL_WORD: ('Word not recognized', 'This must be a real word!'),
    RejectionReason.ALREADY_USED: ('Word already exists!', "You can't input the same word twice!"),
    RejectionReason.NOT_COMPOSABLE: ('Word not possible', 'This word is not possible from "{root_word}"'),
}


@dataclass(frozen=True)
class GameState:
    root_word: str
    root_word_pool: Tuple[str, ...] = ()
    accepted_words: Tuple[str, ...] = ()  # most recent first
    score: int = 0


@dataclass(frozen=True)
class Accepted:
    word: str
    points: int

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    word: str
    reason: RejectionReason
    title: str
    message: str

    @property
    def accepted(self) -> bool:
        return False


SubmitResult = Union[Accepted, Rejected]


# Root word pool

def parse_root_word_pool(text: str) -> list:
    """Split a newline-delimited blob into root words, dropping blank lines."""
    words = []
    for line in text.split('\n'):
        word = line.strip().lower()
        if word:
            words.append(word)
    return words


def load_root_word_pool(source: Union[str, Path]) -> list:
    """
    Read the root word list from ``source``.

    Raises:
        RootWordSourceError: if the file is missing, unreadable or not UTF-8.
    """
    path = Path(source)
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise RootWordSourceError(f"Could not load root words from {path}: {e}") from e
    pool = parse_root_word_pool(text)
    logger.info(f"Loaded {len(pool)} root words from {path}")
    return pool


def pick_root_word(pool: Sequence[str], rng: Optional[random.Random] = None) -> str:
    if not pool:
        return DEFAULT_ROOT_WORD
    return (rng or random).choice(pool)


# State transitions

def new_game(pool: Sequence[str], rng: Optional[random.Random] = None) -> GameState:
    pool = tuple(pool)
    return GameState(root_word=pick_root_word(pool, rng), root_word_pool=pool)


def new_round(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Pick a fresh root word. Score and accepted words start over with it."""
    return replace(
        state,
        root_word=pick_root_word(state.root_word_pool, rng),
        accepted_words=(),
        score=0,
    )


def clear_accepted(state: GameState) -> GameState:
    return replace(state, accepted_words=())


def normalize(candidate: str) -> str:
    return candidate.strip().lower()


def is_identical_to_root(word: str, root_word: str) -> bool:
    return word == root_word


def is_real(word: str, oracle: WordOracle) -> bool:
    if not word:
        return False
    return oracle.is_valid_english_word(word)


def is_original(word: str, accepted_words: Sequence[str]) -> bool:
    return word not in accepted_words


def is_composable(word: str, root_word: str) -> bool:
    # Each letter of the word uses up one occurrence in the root
    return not (Counter(word) - Counter(root_word))


def _reject(word: str, reason: RejectionReason, root_word: str) -> Rejected:
    title, message = REJECTION_TEXT[reason]
    return Rejected(word=word, reason=reason, title=title, message=message.format(root_word=root_word))


def submit(state: GameState, candidate: str, oracle: WordOracle) -> Tuple[GameState, SubmitResult]:
    """
    Validate ``candidate`` against the current round.

    Checks run in a fixed order and stop at the first failure: same as the
    root word, not a real word, already used, not composable from the root.
    A rejection returns ``state`` untouched.
    """
    word = normalize(candidate)

    if is_identical_to_root(word, state.root_word):
        reason = RejectionReason.IDENTICAL_TO_ROOT
    elif not is_real(word, oracle):
        reason = RejectionReason.NOT_A_REAL_WORD
    elif not is_original(word, state.accepted_words):
        reason = RejectionReason.ALREADY_USED
    elif not is_composable(word, state.root_word):
        reason = RejectionReason.NOT_COMPOSABLE
    else:
        reason = None

    if reason is not None:
        return state, _reject(word, reason, state.root_word)

    new_state = replace(
        state,
        accepted_words=(word,) + state.accepted_words,
        score=state.score + len(word),
    )
    return new_state, Accepted(word=word, points=len(word))


class WordGame:
    """A single play session over ``GameState``."""

    def __init__(self, pool: Sequence[str], oracle: WordOracle, rng: Optional[random.Random] = None):
        self.oracle = oracle
        self.rng = rng
        self.state = new_game(pool, rng)

    @property
    def root_word(self) -> str:
        return self.state.root_word

    @property
    def accepted_words(self) -> Tuple[str, ...]:
        return self.state.accepted_words

    @property
    def score(self) -> int:
        return self.state.score

    def submit(self, candidate: str) -> SubmitResult:
        self.state, result = submit(self.state, candidate, self.oracle)
        return result

    def new_word(self) -> str:
        self.state = new_round(self.state, self.rng)
        return self.state.root_word

    def clear_accepted(self) -> None:
        self.state = clear_accepted(self.state)
