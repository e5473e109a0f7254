import secrets

from fastapi import Depends, Header, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials, HTTPBearer, HTTPAuthorizationCredentials

from leadintake.core.exceptions import AdminNotConfigured, AuthenticationError, Unauthorized
from leadintake.core.security import verify_token
from leadintake.models.user import User
from leadintake.services.intake_service import IntakeService
from leadintake.services.intake_types import IntakeDefinition, resolve_intake_type
from leadintake.services.moderation_service import ModerationService
from leadintake.services.user_service import UserService

bearer = HTTPBearer(auto_error=False)
basic = HTTPBasic(auto_error=False, realm="Admin")
BASIC_CHALLENGE = {"WWW-Authenticate": 'Basic realm="Admin"'}


def get_intake_service(request: Request) -> IntakeService:
    return request.app.state.intake_service


def get_moderation_service(request: Request) -> ModerationService:
    return request.app.state.moderation_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_intake_type(intake_type: str) -> IntakeDefinition:
    """Path parameter -> intake definition (404 when unknown)."""
    return resolve_intake_type(intake_type)


def get_admin_key(x_admin_key: str | None = Header(default=None, alias="x-admin-key")) -> str | None:
    return x_admin_key


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    user_service: UserService = Depends(get_user_service),
) -> User:
    """Get current authenticated user"""
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    email = verify_token(credentials.credentials)
    if email is None:
        raise AuthenticationError("Invalid authentication credentials")
    user = user_service.get_user_by_email(email)
    if user is None or not user.is_active:
        raise AuthenticationError("User not found")
    return user


def require_admin_login(request: Request, credentials: HTTPBasicCredentials | None = Depends(basic)) -> str:
    """HTTP Basic lock for the admin UI files."""
    settings = request.app.state.settings
    user = (settings.ADMIN_USER or "").strip()
    password = (settings.ADMIN_PASS or "").strip()
    if not user or not password:
        raise AdminNotConfigured("Admin UI not configured (set ADMIN_USER and ADMIN_PASS)")
    if credentials is None:
        raise Unauthorized("Authentication required", headers=BASIC_CHALLENGE)
    user_ok = secrets.compare_digest(credentials.username.encode(), user.encode())
    pass_ok = secrets.compare_digest(credentials.password.encode(), password.encode())
    if not (user_ok and pass_ok):
        raise Unauthorized("Invalid credentials", headers=BASIC_CHALLENGE)
    return credentials.username
