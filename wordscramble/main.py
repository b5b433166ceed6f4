from __future__ import annotations
import logging
import random
import sys
from typing import Dict

import socketio
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from .config import SETTINGS, LOGGER_NAME_MAIN, LOGGER_NAME_GAME, LOGGER_NAME_DICT
from .dictionary import DictionaryService, FrequencyDictionary
from .game_logic import RootWordSourceError, load_root_word_pool
from .managers.game import GameManager
from .routers.ws import router as ws_router
from .schemas import GameStateView, SubmitRequest, SubmitResponse, WordValidation

def setup_logging() -> logging.Logger:
    """Configure the application loggers."""
    log_level = logging.DEBUG if SETTINGS.dev_mode else logging.INFO
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers = []
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    handlers.append(console_handler)

    if SETTINGS.log_dir:
        SETTINGS.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(SETTINGS.log_dir / "wordscramble.log", encoding="utf-8", mode="a")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    for logger_name in [LOGGER_NAME_MAIN, LOGGER_NAME_GAME, LOGGER_NAME_DICT]:
        named = logging.getLogger(logger_name)
        named.setLevel(logging.DEBUG)
        # Re-imports must not stack handlers
        named.handlers.clear()
        for handler in handlers:
            named.addHandler(handler)

    return logging.getLogger(LOGGER_NAME_MAIN)

logger = setup_logging()

# The game cannot run without its root words: fail startup instead of degrading
try:
    root_words = load_root_word_pool(SETTINGS.root_words_path)
except RootWordSourceError as e:
    logger.critical(str(e))
    raise

if SETTINGS.dictionary_path:
    dict_service = DictionaryService.from_file(SETTINGS.dictionary_path)
else:
    dict_service = FrequencyDictionary(SETTINGS.min_word_zipf)
rng = random.Random(SETTINGS.random_seed) if SETTINGS.random_seed is not None else None

# Socket.IO server (ASGI)
sio = socketio.AsyncServer(async_mode='asgi', cors_allowed_origins='*')
app = FastAPI(title="Word Scramble Server", version="0.1.0")

# Mount Socket.IO ASGI application
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)

# CORS for REST
app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

games = GameManager(sio, root_words, dict_service, rng)
app.state.games = games

# Plain WebSocket clients
app.include_router(ws_router, prefix='/ws')

# REST Endpoints
@app.get('/games/{game_id}', response_model=GameStateView)
async def get_game(game_id: str):
    return games.get_state(game_id)

@app.post('/games/{game_id}/words', response_model=SubmitResponse)
async def submit_word(game_id: str, body: SubmitRequest):
    result = await games.submit_word(game_id, body.word)
    return SubmitResponse.from_result(result, games.get_state(game_id))

@app.post('/games/{game_id}/new-word', response_model=GameStateView)
async def new_word(game_id: str):
    await games.new_word(game_id)
    return games.get_state(game_id)

@app.post('/games/{game_id}/reset', response_model=GameStateView)
async def reset_words(game_id: str):
    await games.clear_words(game_id)
    return games.get_state(game_id)

@app.delete('/games/{game_id}')
async def delete_game(game_id: str) -> Dict[str, bool]:
    return { 'ok': games.remove(game_id) }

# Dictionary validation REST endpoint
@app.get('/dict/validate', response_model=WordValidation)
async def validate_word(word: str):
    word = word.strip().lower()
    return WordValidation(word=word, valid=dict_service.is_valid_english_word(word))

# Socket.IO Events
@sio.event
async def connect(sid, environ, auth):
    await sio.save_session(sid, { 'game_id': None })
    await sio.emit('pong', to=sid)

@sio.event
async def disconnect(sid):
    logger.debug(f"Socket {sid} disconnected")

@sio.on('ping')
async def on_ping(sid):
    await sio.emit('pong', to=sid)

async def _session_game_id(sid):
    sess = await sio.get_session(sid)
    return sess.get('game_id') if sess else None

@sio.on('game:join')
async def game_join(sid, game_id: str):
    if not isinstance(game_id, str) or not game_id.strip():
        await sio.emit('game:error', { 'error': 'Invalid game id' }, to=sid)
        return
    game_id = game_id.strip()
    sess = await sio.get_session(sid) or {}
    # A socket follows one game at a time
    previous = sess.get('game_id')
    if previous and previous != game_id:
        await sio.leave_room(sid, previous)
    await sio.enter_room(sid, game_id)
    await sio.save_session(sid, { **sess, 'game_id': game_id })
    await sio.emit('game:state', games.get_state(game_id).model_dump(), to=sid)

@sio.on('word:submit')
async def word_submit(sid, payload):
    game_id = await _session_game_id(sid)
    if not game_id:
        await sio.emit('game:error', { 'error': 'Join a game first' }, to=sid)
        return
    try:
        request = SubmitRequest.model_validate(payload)
    except ValidationError:
        await sio.emit('game:error', { 'error': 'Missing word' }, to=sid)
        return
    result = await games.submit_word(game_id, request.word)
    # Emit the outcome back to the sender only
    response = SubmitResponse.from_result(result, games.get_state(game_id))
    await sio.emit('word:result', response.model_dump(), to=sid)

@sio.on('game:newWord')
async def game_new_word(sid):
    game_id = await _session_game_id(sid)
    if not game_id:
        await sio.emit('game:error', { 'error': 'Join a game first' }, to=sid)
        return
    await games.new_word(game_id)

@sio.on('game:reset')
async def game_reset(sid):
    game_id = await _session_game_id(sid)
    if not game_id:
        await sio.emit('game:error', { 'error': 'Join a game first' }, to=sid)
        return
    await games.clear_words(game_id)

# Export ASGI app for uvicorn
application = asgi_app

def run():
    """Console entry point."""
    logger.info(f"Starting Word Scramble server on {SETTINGS.host}:{SETTINGS.port}")
    uvicorn.run(application, host=SETTINGS.host, port=SETTINGS.port)

# For local running: uvicorn wordscramble.main:application --reload --host 0.0.0.0 --port 8000
if __name__ == '__main__':
    run()
