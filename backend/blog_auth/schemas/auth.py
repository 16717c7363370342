"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    username = fields.String(required=True, validate=validate.Length(min=1, max=50))
    password = fields.String(
        required=True, load_only=True, validate=validate.Length(min=1, max=128)
    )


class RefreshSchema(Schema):
    """Optional JSON body for ``/auth/refresh`` when no Bearer header is sent."""

    refresh_token = fields.String(load_default=None, load_only=True)


class UserProfileSchema(Schema):
    """Public user profile; never includes the password hash or sessions."""

    id = fields.String(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    role = fields.String(required=True)
    is_active = fields.Boolean(required=True)


class AuthSessionSchema(Schema):
    """Response payload for login and refresh."""

    access_token = fields.String(required=True)
    access_token_expires_in = fields.Integer(required=True)
    refresh_token = fields.String(required=True)
    user = fields.Nested(UserProfileSchema, required=True)


class RevocationSchema(Schema):
    """Response payload for logout."""

    deleted_count = fields.Integer(required=True)
