"""Decoding of Elasticsearch error responses.

Elasticsearch reports failures as::

    {"error": {"type": "...", "reason": "...", "root_cause": [...]}, "status": 400}

Root causes, when present, are appended to the message as indented JSON.
"""

import json

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from elastic_package.errors import ElasticsearchError


class Position(BaseModel):
    offset: int = 0
    start: int = 0
    end: int = 0


class SuppressedError(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str = ""
    reason: str = ""
    processor_type: str | None = None


class RootCause(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str = ""
    reason: str = ""
    processor_type: str | None = None
    script_stack: list[str] | None = None
    script: str | None = None
    lang: str | None = None
    position: Position | None = None
    suppressed: list[SuppressedError] | None = None


class ErrorDetails(RootCause):
    root_cause: list[RootCause] = Field(default_factory=list)
    caused_by: dict | None = None


class ErrorBody(BaseModel):
    error: ErrorDetails = Field(default_factory=ErrorDetails)
    status: int | None = None


def new_error(body: bytes | str) -> ElasticsearchError:
    """Build an error from a response body.

    Bodies that are not a JSON error object are included verbatim.
    """
    raw = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body

    try:
        parsed = ErrorBody.model_validate_json(raw)
    except ValidationError:
        return ElasticsearchError(f"elasticsearch error: {raw}")

    error = parsed.error
    if error.root_cause:
        root_cause = json.dumps(
            [cause.model_dump(exclude_none=True) for cause in error.root_cause], indent=2
        )
        message = (
            f"elasticsearch error (type={error.type}): {error.reason}\nRoot cause:\n{root_cause}"
        )
    else:
        message = f"elasticsearch error (type={error.type}): {error.reason}"

    return ElasticsearchError(message, error_type=error.type, status=parsed.status)
