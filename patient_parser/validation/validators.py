# patient_parser/validation/validators.py
from typing import Any

from pydantic import BaseModel, StrictStr, field_validator
from pydantic import ValidationError as SchemaError


class ParseMessageRequest(BaseModel):
    message: StrictStr

    @field_validator("message")
    @classmethod
    def _not_empty(cls, v: str):
        if not v.strip():
            raise ValueError("message must be a non-empty string")
        return v


def describe_schema_error(ex: SchemaError) -> str:
    """Primer error de pydantic en una línea legible para el cliente."""
    err = ex.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ())) or "body"
    if err.get("type") == "missing":
        return f"{loc} is required"
    if err.get("type") == "string_type":
        return f"{loc} must be a string"
    msg = err.get("msg", "invalid value")
    return f"{loc}: {msg.removeprefix('Value error, ')}"


def validate_request_or_raise(body: Any) -> ParseMessageRequest:
    """Construye el modelo y levanta pydantic ValidationError si falta/está mal."""
    if not isinstance(body, dict):
        # Cuerpo JSON que no es objeto: se trata como "message" ausente
        body = {}
    return ParseMessageRequest.model_validate(body)
