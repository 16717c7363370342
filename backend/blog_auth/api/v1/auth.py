"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, request

from blog_auth.api.deps import (
    bearer_token,
    current_user_id,
    get_auth_service,
    json_response,
    require_auth,
    timing,
)
from blog_auth.schemas import (
    AuthSessionSchema,
    LoginSchema,
    RefreshSchema,
    RevocationSchema,
    UserProfileSchema,
)
from blog_auth.services.auth import LoginIn, LogoutIn, RefreshIn

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
refresh_schema = RefreshSchema()
session_schema = AuthSessionSchema()
profile_schema = UserProfileSchema()
revocation_schema = RevocationSchema()


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and open a new session."""

    data = login_schema.load(request.get_json(silent=True) or {})
    dto = LoginIn(username=data["username"], password=data["password"])
    result = get_auth_service().login(dto)
    body = {"message": "Login successful", "data": session_schema.dump(result.unwrap())}
    return json_response(body, status=201)


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a refresh token (Bearer header or JSON body) for a new pair."""

    token = bearer_token()
    if token is None:
        data = refresh_schema.load(request.get_json(silent=True) or {})
        token = data.get("refresh_token")
    result = get_auth_service().refresh(RefreshIn(refresh_token=token or ""))
    body = {"message": "Token refreshed", "data": session_schema.dump(result.unwrap())}
    return json_response(body)


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Revoke every session of the authenticated user."""

    result = get_auth_service().logout(LogoutIn(user_id=current_user_id()))
    body = {"message": "Logged out", "data": revocation_schema.dump(result.unwrap())}
    return json_response(body)


@bp.get("/profile")
@require_auth
@timing
def profile():
    """Return the authenticated user's public profile."""

    user = get_auth_service().profile(current_user_id())
    return json_response({"message": "Profile retrieved", "data": profile_schema.dump(user)})
