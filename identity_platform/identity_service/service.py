"""
Signup and signin orchestration.

Both flows raise AuthError subclasses internally; the public methods are
the orchestration boundary and always return an AuthResult instead of
raising.
"""
from dataclasses import dataclass
from typing import Any, Optional, Union
import json
import logging

from .auth import TokenIssuer
from .errors import (
    AuthError,
    InternalError,
    MalformedRequest,
    NotFoundError,
    OutcomeKind,
    ValidationError,
)
from .schemas import SigninInput, SignupInput
from .store import AccountStore
from .validation import validate

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    kind: OutcomeKind
    token: Optional[str] = None
    account_id: Optional[str] = None
    email: Optional[str] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


def parse_body(raw_body: Union[bytes, str]) -> Any:
    try:
        return json.loads(raw_body)
    except (ValueError, TypeError) as e:
        raise MalformedRequest("Request body is not valid JSON") from e


class AuthService:
    def __init__(self, store: AccountStore, token_issuer: TokenIssuer):
        self._store = store
        self._token_issuer = token_issuer

    def signup(self, raw_body: Union[bytes, str]) -> AuthResult:
        return self._run("signup", raw_body)

    def signin(self, raw_body: Union[bytes, str]) -> AuthResult:
        return self._run("signin", raw_body)

    def _run(self, flow: str, raw_body) -> AuthResult:
        email = None
        try:
            data = self._parse_and_validate(raw_body, flow)
            email = data.email
            if flow == "signup":
                return self._signup(data)
            return self._signin(data)
        except AuthError as e:
            logger.info("%s failed: kind=%s detail=%s", flow, e.kind.value, e)
            return AuthResult(kind=e.kind, email=email, detail=str(e))
        except Exception:
            logger.exception("%s failed with an unexpected error", flow)
            return AuthResult(kind=InternalError.kind, email=email)

    def _parse_and_validate(self, raw_body, schema_name: str):
        body = parse_body(raw_body)
        verdict = validate(body, schema_name)
        if not verdict.success:
            logger.debug("%s payload rejected: %s", schema_name, verdict.errors)
            raise ValidationError("Invalid input")
        return verdict.data

    def _signup(self, data: SignupInput) -> AuthResult:
        # An empty password still passes the schema
        if not data.email or not data.password:
            raise ValidationError("Invalid email or password")

        user = self._store.create(name=data.name, email=data.email, password=data.password)
        try:
            token = self._token_issuer.issue(user.id)
        except Exception:
            self._store.rollback()
            raise
        account_id = user.id
        self._store.commit()

        logger.info("Account created: user_id=%s", account_id)
        return AuthResult(kind=OutcomeKind.SUCCESS, token=token, account_id=account_id, email=data.email)

    def _signin(self, data: SigninInput) -> AuthResult:
        user = self._store.find_by_credentials(email=data.email, password=data.password)
        if user is None:
            raise NotFoundError("No account matches the supplied credentials")

        token = self._token_issuer.issue(user.id)
        return AuthResult(kind=OutcomeKind.SUCCESS, token=token, account_id=user.id, email=data.email)
