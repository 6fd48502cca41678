"""
FastAPI application exposing signup and signin.
"""
from fastapi import FastAPI, Depends, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from contextlib import asynccontextmanager
from typing import Optional

from .auth import TokenIssuer
from .config import Settings, get_settings
from .db import build_engine, build_session_factory, get_db, init_db
from .errors import OutcomeKind
from .routes import health
from .schemas import MessageResponse, TokenResponse
from .service import AuthResult, AuthService
from .store import AccountStore
from .utils.event_logger import configure_logging, log_auth_event

STATUS_CODES = {
    OutcomeKind.SUCCESS: status.HTTP_200_OK,
    OutcomeKind.MALFORMED_REQUEST: status.HTTP_411_LENGTH_REQUIRED,
    OutcomeKind.VALIDATION_ERROR: status.HTTP_411_LENGTH_REQUIRED,
    OutcomeKind.CONFLICT: status.HTTP_500_INTERNAL_SERVER_ERROR,
    OutcomeKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeKind.TOKEN_ISSUANCE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    OutcomeKind.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

MESSAGES = {
    "signup": {
        OutcomeKind.SUCCESS: "User created successfully",
        OutcomeKind.MALFORMED_REQUEST: "Invalid input",
        OutcomeKind.VALIDATION_ERROR: "Invalid input",
        OutcomeKind.CONFLICT: "Email already registered",
        OutcomeKind.TOKEN_ISSUANCE_ERROR: "Failed to create token",
        OutcomeKind.INTERNAL_ERROR: "Failed to create user",
    },
    "signin": {
        OutcomeKind.SUCCESS: "User logged in successfully",
        OutcomeKind.MALFORMED_REQUEST: "Invalid input",
        OutcomeKind.VALIDATION_ERROR: "Invalid input",
        OutcomeKind.NOT_FOUND: "User not found",
        OutcomeKind.TOKEN_ISSUANCE_ERROR: "Failed to create token",
        OutcomeKind.INTERNAL_ERROR: "Failed to login",
    },
}


def to_response(flow: str, result: AuthResult) -> JSONResponse:
    """Translate a service outcome into the HTTP status and JSON body."""
    messages = MESSAGES[flow]
    if result.kind is OutcomeKind.VALIDATION_ERROR and result.detail:
        # Validation detail is caller-facing text
        message = result.detail
    else:
        message = messages.get(result.kind, messages[OutcomeKind.INTERNAL_ERROR])

    if result.ok:
        body = TokenResponse(message=message, token=result.token)
    else:
        body = MessageResponse(message=message)
    return JSONResponse(status_code=STATUS_CODES[result.kind], content=body.model_dump())


async def read_body(request: Request) -> bytes:
    return await request.body()


def get_auth_service(request: Request, db: Session = Depends(get_db)) -> AuthService:
    return AuthService(AccountStore(db), request.app.state.token_issuer)


def record_outcome(flow: str, result: AuthResult, request: Request, db: Session) -> None:
    event_type = f"{flow}_success" if result.ok else f"{flow}_failure"
    log_auth_event(
        event_type,
        request,
        db,
        user_id=result.account_id,
        email=result.email,
        metadata={"outcome": result.kind.value},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    engine = build_engine(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        configure_logging(settings)
        init_db(engine)
        yield
        engine.dispose()

    app = FastAPI(title="Identity Service", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_issuer = TokenIssuer.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)

    @app.post("/signup")
    def signup(
        request: Request,
        body: bytes = Depends(read_body),
        service: AuthService = Depends(get_auth_service),
        db: Session = Depends(get_db),
    ):
        result = service.signup(body)
        record_outcome("signup", result, request, db)
        return to_response("signup", result)

    @app.post("/signin")
    def signin(
        request: Request,
        body: bytes = Depends(read_body),
        service: AuthService = Depends(get_auth_service),
        db: Session = Depends(get_db),
    ):
        result = service.signin(body)
        record_outcome("signin", result, request, db)
        return to_response("signin", result)

    return app


app = create_app()
