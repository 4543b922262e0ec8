"""Body parsing: JSON when it parses, raw text otherwise."""
from typing import Any, Dict, Mapping
from urllib.parse import parse_qsl
from scorerelay.models import Body, JsonBody, TextBody
import json

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_body(text: str) -> Body:
    """Interpret text as JSON, falling back to the raw text unchanged."""
    try:
        return JsonBody(value=json.loads(text, parse_constant=_reject_constant))
    except (ValueError, RecursionError):
        # malformed or too deeply nested
        return TextBody(value=text)


def decode_request_fields(raw: bytes, content_type: str = "") -> Dict[str, Any]:
    """
    Turn an inbound request body into a field mapping.
    
    Form bodies keep the first value per key. Anything else is read as JSON;
    a body that is not a JSON object yields no fields.
    """
    text = raw.decode("utf-8", errors="replace")
    media_type = content_type.split(";")[0].strip().lower()
    
    if media_type == FORM_CONTENT_TYPE:
        fields: Dict[str, Any] = {}
        for key, value in parse_qsl(text, keep_blank_values=True):
            fields.setdefault(key, value)
        return fields
    
    body = parse_body(text)
    if isinstance(body, JsonBody) and isinstance(body.value, Mapping):
        return dict(body.value)
    return {}
