"""
Error kinds raised inside the identity service and the outcome they map to.
"""
from enum import Enum


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    MALFORMED_REQUEST = "malformed_request"
    VALIDATION_ERROR = "validation_error"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    TOKEN_ISSUANCE_ERROR = "token_issuance_error"
    INTERNAL_ERROR = "internal_error"


class AuthError(Exception):
    """Base class for failures the auth flows report to the caller."""

    kind = OutcomeKind.INTERNAL_ERROR


class MalformedRequest(AuthError):
    """Request body could not be parsed as JSON."""

    kind = OutcomeKind.MALFORMED_REQUEST


class ValidationError(AuthError):
    """Payload does not match the expected schema."""

    kind = OutcomeKind.VALIDATION_ERROR


class ConflictError(AuthError):
    """An account with this email already exists."""

    kind = OutcomeKind.CONFLICT


class NotFoundError(AuthError):
    """No account matches the supplied credentials."""

    kind = OutcomeKind.NOT_FOUND


class TokenIssuanceError(AuthError):
    """The session token could not be signed."""

    kind = OutcomeKind.TOKEN_ISSUANCE_ERROR


class InternalError(AuthError):
    kind = OutcomeKind.INTERNAL_ERROR
