from __future__ import annotations
import logging
import random
from typing import Dict, Optional, Sequence

from ..config import LOGGER_NAME_GAME
from ..dictionary import WordOracle
from ..game_logic import SubmitResult, WordGame
from ..schemas import GameStateView

logger = logging.getLogger(LOGGER_NAME_GAME)

class Game:
    def __init__(self, game_id: str, sio, word_game: WordGame):
        self.id = game_id
        self.sio = sio
        self.word_game = word_game

    def to_state(self) -> GameStateView:
        return GameStateView.from_state(self.id, self.word_game.state)

    async def broadcast_state(self):
        await self.sio.emit('game:state', self.to_state().model_dump(), room=self.id)

    async def submit_word(self, word: str) -> SubmitResult:
        result = self.word_game.submit(word)
        if result.accepted:
            logger.info(f"[{self.id}] accepted '{result.word}' (+{result.points}, score {self.word_game.score})")
            # Only acceptances change state; rejections go back to the sender alone
            await self.broadcast_state()
        else:
            logger.debug(f"[{self.id}] rejected '{result.word}': {result.reason.value}")
        return result

    async def new_word(self) -> str:
        root = self.word_game.new_word()
        logger.info(f"[{self.id}] new root word '{root}'")
        await self.broadcast_state()
        return root

    async def clear_words(self):
        self.word_game.clear_accepted()
        logger.info(f"[{self.id}] cleared accepted words")
        await self.broadcast_state()

class GameManager:
    def __init__(self, sio, pool: Sequence[str], oracle: WordOracle, rng: Optional[random.Random] = None):
        self.sio = sio
        self.pool = tuple(pool)
        self.oracle = oracle
        self.rng = rng
        self.games: Dict[str, Game] = {}

    def get_or_create(self, game_id: str) -> Game:
        if game_id not in self.games:
            word_game = WordGame(self.pool, self.oracle, self.rng)
            self.games[game_id] = Game(game_id, self.sio, word_game)
            logger.info(f"[{game_id}] new game with root word '{word_game.root_word}'")
        return self.games[game_id]

    def get_state(self, game_id: str) -> GameStateView:
        return self.get_or_create(game_id).to_state()

    async def submit_word(self, game_id: str, word: str) -> SubmitResult:
        game = self.get_or_create(game_id)
        return await game.submit_word(word)

    async def new_word(self, game_id: str) -> str:
        game = self.get_or_create(game_id)
        return await game.new_word()

    async def clear_words(self, game_id: str):
        game = self.get_or_create(game_id)
        await game.clear_words()

    def remove(self, game_id: str) -> bool:
        removed = self.games.pop(game_id, None) is not None
        if removed:
            logger.info(f"[{game_id}] game removed")
        return removed
