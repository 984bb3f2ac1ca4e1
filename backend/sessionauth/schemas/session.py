"""Request/response schemas for the session endpoints."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

from sessionauth.services.session.dto import CredentialsIn, TokenIn


def _required_string(message: str) -> fields.String:
    """A string field where missing, null, non-string and empty all report ``message``."""
    return fields.String(
        required=True,
        validate=validate.Length(min=1, error=message),
        error_messages={"required": message, "null": message, "invalid": message},
    )


class CredentialsSchema(Schema):
    """Input payload for sign-up and sign-in. Field order sets error priority."""

    class Meta:
        unknown = EXCLUDE

    email = _required_string("Email is required")
    password = _required_string("Password is required")

    @post_load
    def make_dto(self, data: dict[str, Any], **_: Any) -> CredentialsIn:
        return CredentialsIn(email=data["email"], password=data["password"])


class TokenSchema(Schema):
    """Input payload for refresh and verify."""

    class Meta:
        unknown = EXCLUDE

    token = _required_string("Token is required")

    @post_load
    def make_dto(self, data: dict[str, Any], **_: Any) -> TokenIn:
        return TokenIn(token=data["token"])


class MessageSchema(Schema):
    """Response payload carrying only a message."""

    message = fields.String(required=True)


class TokenResponseSchema(MessageSchema):
    """Response payload carrying a session token."""

    token = fields.String(required=True)


class VerificationResponseSchema(MessageSchema):
    """Response payload of a successful verification."""

    valid = fields.Boolean(required=True)
