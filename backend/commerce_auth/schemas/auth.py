"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    email = fields.String(required=True, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshSchema(Schema):
    """Input payload carrying a refresh token."""

    refresh_token = fields.String(required=True, validate=validate.Length(min=1))


class LogoutSchema(RefreshSchema):
    """Input payload for revoking a refresh token."""


class TokenPairSchema(Schema):
    """Response payload of a successful login."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
    token_type = fields.String(required=True)
    expires_in = fields.Integer(required=True)


class AccessTokenSchema(Schema):
    """Response payload of a successful refresh."""

    access_token = fields.String(required=True)
    token_type = fields.String(required=True)
    expires_in = fields.Integer(required=True)


class MeSchema(Schema):
    """Response payload exposing identity details for the authenticated user."""

    id = fields.String(required=True)
    name = fields.String(required=True)
    email = fields.Email(required=True)
    role = fields.Function(lambda identity: identity.role.value)
