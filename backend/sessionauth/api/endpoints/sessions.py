"""Session lifecycle endpoints using the service layer."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app

from sessionauth.api.deps import bearer_token, get_session_service, json_body, json_response
from sessionauth.core.errors import APIError
from sessionauth.schemas import (
    CredentialsSchema,
    MessageSchema,
    TokenResponseSchema,
    TokenSchema,
    VerificationResponseSchema,
)
from sessionauth.services._shared.errors import RevocationStoreUnavailable, UserNotFoundError
from sessionauth.services.session import TokenIn

bp = Blueprint("sessions", __name__)

credentials_schema = CredentialsSchema()
token_schema = TokenSchema()
message_schema = MessageSchema()
token_response_schema = TokenResponseSchema()
verification_schema = VerificationResponseSchema()


@bp.get("/")
def index():
    """Liveness greeting."""

    return "Hello World!"


@bp.post("/signup")
def signup():
    """Create an account from ``{email, password}``."""

    dto = credentials_schema.load(json_body())
    get_session_service().sign_up(dto)
    return json_response(message_schema.dump({"message": "User created"}))


@bp.post("/signin")
def signin():
    """Verify credentials and return an active session token."""

    dto = credentials_schema.load(json_body())
    out = get_session_service().sign_in(dto)
    return json_response(token_response_schema.dump({"token": out.token, "message": "User logged in"}))


@bp.post("/refresh-token")
def refresh_token():
    """Swap a valid token for a new one; the old one stops verifying."""

    dto = token_schema.load(json_body())
    try:
        out = get_session_service().refresh(dto)
    except UserNotFoundError as exc:
        # Refresh reports a vanished subject as a bad request, verify as 404.
        raise APIError(str(exc), status_code=HTTPStatus.BAD_REQUEST) from exc
    body = {"token": out.token, "message": "Token refreshed successfully"}
    return json_response(token_response_schema.dump(body))


@bp.post("/verify-token")
def verify_token():
    """Authoritative check: signature, expiry, liveness and subject."""

    dto = token_schema.load(json_body())
    out = get_session_service().verify(dto)
    return json_response(verification_schema.dump({"message": "Token is valid", "valid": out.valid}))


@bp.post("/signout")
def signout():
    """Deactivate the bearer token. Signing out twice is fine."""

    token = bearer_token()
    if not token:
        raise APIError("Token is required", status_code=HTTPStatus.BAD_REQUEST)
    try:
        get_session_service().sign_out(TokenIn(token=token))
    except RevocationStoreUnavailable as exc:
        current_app.logger.error("Sign-out could not reach the revocation store", exc_info=True)
        raise APIError("Error logging out", status_code=HTTPStatus.BAD_REQUEST) from exc
    return json_response(message_schema.dump({"message": "User logged out"}))
