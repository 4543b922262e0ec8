"""Arcade game catalog routes."""
from fastapi import APIRouter, HTTPException
from typing import List
from scorerelay.models import GameId, GameInfo

router = APIRouter(prefix="/api/games", tags=["games"])

# Mirrors the front-end routes; score_field is the submission key for each game
GAMES = {
    GameId.SNAKE: GameInfo(id=GameId.SNAKE, title="Snake", path="/snake", score_field="snakeScore"),
    GameId.FLAPPY_BIRD: GameInfo(id=GameId.FLAPPY_BIRD, title="Flappy Bird", path="/flappybird", score_field="flappyScore"),
    GameId.STACK_THE_BLOCKS: GameInfo(id=GameId.STACK_THE_BLOCKS, title="Stack The Blocks", path="/stacktheblocks", score_field="stackScore"),
}


@router.get("")
async def list_games() -> List[GameInfo]:
    """List the arcade games whose scores the relay accepts."""
    return list(GAMES.values())


@router.get("/{game_id}")
async def get_game(game_id: str) -> GameInfo:
    """Get a single game's details."""
    
    try:
        return GAMES[GameId(game_id)]
    except ValueError:
        raise HTTPException(status_code=404, detail="Game not found")
