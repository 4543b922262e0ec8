"""Submission field validation and score coercion."""
from decimal import Decimal
from typing import Any, Mapping
from scorerelay.models import ErrorCode, SubmissionRequest
import math
import re

# Century-prefixed year, two letters, two digits (e.g. 2023CS10)
ROLL_PATTERN = re.compile(r"2[0-9]{3}[A-Za-z]{2}[0-9]{2}")

SCORE_FIELDS = ("snakeScore", "flappyScore", "stackScore")


class RelayError(Exception):
    """A request rejected before anything is sent upstream."""

    def __init__(self, status_code: int, code: ErrorCode):
        super().__init__(code.value)
        self.status_code = status_code
        self.code = code


def is_valid_roll(roll: Any) -> bool:
    return isinstance(roll, str) and ROLL_PATTERN.fullmatch(roll) is not None


def _to_float(number: Any) -> float:
    try:
        number = float(number)
    except OverflowError:
        return math.inf
    return 0.0 if math.isnan(number) else number


def _coerce_text(text: str) -> float:
    text = text.strip()
    if not text or "_" in text:
        return 0.0
    unsigned = text.lstrip("+-")
    if unsigned.lower() in ("inf", "infinity", "nan"):
        # only the exact spelling Infinity counts as a number
        if unsigned != "Infinity" or len(text) - len(unsigned) > 1:
            return 0.0
        return -math.inf if text.startswith("-") else math.inf
    if text[:2].lower() in ("0x", "0o", "0b"):
        try:
            return _to_float(int(text, 0))
        except ValueError:
            return 0.0
    try:
        return _to_float(text)
    except ValueError:
        return 0.0


def coerce_score(value: Any) -> float:
    """
    Coerce a submitted score to a number.
    
    Missing, blank and unparseable values become 0. Numeric strings may use
    decimal/exponent notation, 0x/0o/0b integer prefixes or Infinity.
    A single-element list coerces as its element; other containers are 0.
    """
    if value is None or isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return _to_float(value)
    if isinstance(value, str):
        return _coerce_text(value)
    if isinstance(value, list) and len(value) == 1:
        element = value[0]
        if element is None or isinstance(element, bool):
            return 0.0
        return coerce_score(element)
    return 0.0


def format_score(score: float) -> str:
    """
    Render a score the way a browser prints a number.
    
    Plain digits for exponents in [-7, 21), e.g. 10 and 0.5; exponent
    notation outside it, e.g. 1e+21 and 1e-7; Infinity for overflow.
    """
    score = float(score)
    if math.isinf(score):
        return "Infinity" if score > 0 else "-Infinity"
    if score == 0:
        return "0"
    shortest = repr(score)
    exponent = Decimal(shortest).adjusted()
    if -7 < exponent < 21:
        return format(Decimal(shortest).normalize(), "f")
    mantissa, _, _ = shortest.partition("e")
    sign = "+" if exponent > 0 else "-"
    return f"{mantissa}e{sign}{abs(exponent)}"


def validate_submission(fields: Mapping[str, Any]) -> SubmissionRequest:
    """Validate raw submission fields, raising RelayError on rejection."""
    roll = fields.get("roll")
    if not is_valid_roll(roll):
        raise RelayError(400, ErrorCode.INVALID_ROLL)
    
    scores = [coerce_score(fields.get(name)) for name in SCORE_FIELDS]
    for score in scores:
        if score < 0:
            raise RelayError(400, ErrorCode.INVALID_SCORE)
    
    snake, flappy, stack = scores
    return SubmissionRequest(
        roll=roll,
        snakeScore=snake,
        flappyScore=flappy,
        stackScore=stack,
    )
