import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from wordscramble.config import LOGGER_NAME_GAME
from wordscramble.managers.game import GameManager
from wordscramble.schemas import SubmitRequest, SubmitResponse

router = APIRouter()
logger = logging.getLogger(LOGGER_NAME_GAME)

@router.websocket("/{game_id}")
async def websocket_endpoint(websocket: WebSocket, game_id: str):
    await websocket.accept()
    games: GameManager = websocket.app.state.games

    # Send initial state to player
    await websocket.send_json({
        "type": "init",
        "state": games.get_state(game_id).model_dump(),
    })

    try:
        while True:
            try:
                data = await websocket.receive_json()
            except ValueError:
                await websocket.send_json({"type": "error", "error": "Invalid JSON"})
                continue
            kind = data.get("type") if isinstance(data, dict) else None
            if kind == "submit":
                try:
                    request = SubmitRequest.model_validate(data)
                except ValidationError:
                    await websocket.send_json({"type": "error", "error": "Missing word"})
                    continue
                result = await games.submit_word(game_id, request.word)
                response = SubmitResponse.from_result(result, games.get_state(game_id))
                await websocket.send_json({"type": "result", **response.model_dump()})
            elif kind == "new-word":
                await games.new_word(game_id)
                await websocket.send_json({"type": "state", "state": games.get_state(game_id).model_dump()})
            elif kind == "reset":
                await games.clear_words(game_id)
                await websocket.send_json({"type": "state", "state": games.get_state(game_id).model_dump()})
            else:
                await websocket.send_json({"type": "error", "error": f"Unknown message type: {kind}"})
    except WebSocketDisconnect:
        logger.debug(f"[{game_id}] websocket client disconnected")
