from __future__ import annotations
from pydantic import BaseModel
from typing import List, Literal, Optional

from .game_logic import GameState, SubmitResult

RejectionCode = Literal['IdenticalToRoot', 'NotARealWord', 'AlreadyUsed', 'NotComposable']

class SubmitRequest(BaseModel):
    word: str

class AcceptedWord(BaseModel):
    word: str
    length: int

class GameStateView(BaseModel):
    gameId: str
    rootWord: str
    score: int = 0
    acceptedWords: List[AcceptedWord] = []

    @classmethod
    def from_state(cls, game_id: str, state: GameState) -> 'GameStateView':
        return cls(
            gameId=game_id,
            rootWord=state.root_word,
            score=state.score,
            acceptedWords=[AcceptedWord(word=w, length=len(w)) for w in state.accepted_words],
        )

class SubmitResponse(BaseModel):
    accepted: bool
    word: str
    points: int = 0
    # Set only on rejection
    reason: Optional[RejectionCode] = None
    title: Optional[str] = None
    message: Optional[str] = None
    state: GameStateView

    @classmethod
    def from_result(cls, result: SubmitResult, state: GameStateView) -> 'SubmitResponse':
        if result.accepted:
            return cls(accepted=True, word=result.word, points=result.points, state=state)
        return cls(
            accepted=False,
            word=result.word,
            reason=result.reason.value,
            title=result.title,
            message=result.message,
            state=state,
        )

class WordValidation(BaseModel):
    word: str
    valid: bool
