"""Pydantic models for the score relay."""
from typing import Any, Literal, Union
from pydantic import BaseModel, Field
from enum import Enum


class ErrorCode(str, Enum):
    SERVER_NOT_CONFIGURED = "server_not_configured"
    INVALID_ROLL = "invalid_roll"
    INVALID_SCORE = "invalid_score"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    SHEET_ERROR = "sheet_error"
    SERVER_ERROR = "server_error"


class GameId(str, Enum):
    SNAKE = "snake"
    FLAPPY_BIRD = "flappybird"
    STACK_THE_BLOCKS = "stacktheblocks"


class JsonBody(BaseModel):
    kind: Literal["json"] = "json"
    value: Any = None


class TextBody(BaseModel):
    kind: Literal["text"] = "text"
    value: str = ""


Body = Union[JsonBody, TextBody]


class SubmissionRequest(BaseModel):
    """Validated score submission, scores already coerced."""
    roll: str
    snake_score: float = Field(default=0, alias="snakeScore")
    flappy_score: float = Field(default=0, alias="flappyScore")
    stack_score: float = Field(default=0, alias="stackScore")

    model_config = {"populate_by_name": True}


class UpstreamResponse(BaseModel):
    status_code: int
    body_text: str
    body: Body = Field(discriminator="kind")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class RelayResult(BaseModel):
    status_code: int
    payload: Body = Field(discriminator="kind")

    @classmethod
    def of_json(cls, status_code: int, value: Any) -> "RelayResult":
        return cls(status_code=status_code, payload=JsonBody(value=value))

    @classmethod
    def of_text(cls, status_code: int, value: str) -> "RelayResult":
        return cls(status_code=status_code, payload=TextBody(value=value))

    @classmethod
    def of_error(cls, status_code: int, code: ErrorCode, **extra: Any) -> "RelayResult":
        payload = {"error": code.value}
        payload.update(extra)
        return cls.of_json(status_code, payload)


class GameInfo(BaseModel):
    id: GameId
    title: str
    path: str
    score_field: str
