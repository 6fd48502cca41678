"""
Structural validation of signup and signin payloads.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .schemas import SigninInput, SignupInput

SCHEMAS: Dict[str, Type[BaseModel]] = {
    "signup": SignupInput,
    "signin": SigninInput,
}


@dataclass
class Verdict:
    success: bool
    data: Optional[BaseModel] = None
    errors: List[Dict[str, Any]] = field(default_factory=list)


def validate(payload: Any, schema_name: str) -> Verdict:
    """
    Check a decoded request body against the named schema.

    Args:
        payload: Decoded JSON body, any shape
        schema_name: "signup" or "signin"

    Returns:
        Verdict with the parsed model on success, or the pydantic error
        list on failure. Bad payloads never raise.

    Raises:
        ValueError: If schema_name is not a known schema
    """
    try:
        schema = SCHEMAS[schema_name]
    except KeyError:
        raise ValueError(
            f"Unknown schema '{schema_name}'. Must be one of: {', '.join(SCHEMAS)}"
        ) from None

    try:
        data = schema.model_validate(payload)
    except PydanticValidationError as e:
        return Verdict(success=False, errors=e.errors(include_url=False))
    return Verdict(success=True, data=data)
