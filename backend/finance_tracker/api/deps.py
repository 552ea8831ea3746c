from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import Settings
from ..errors import AuthenticationError
from ..schemas import CurrentUser
from ..services.auth_service import decode_access_token
from ..services.report_document import DocumentRenderer

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Settings injected into the app at construction time."""
    return request.app.state.settings


def get_document_renderer(request: Request) -> DocumentRenderer:
    return request.app.state.document_renderer


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """Identity from the ``Authorization: Bearer`` header."""
    if credentials is None:
        raise AuthenticationError("Access token required")
    return decode_access_token(credentials.credentials, settings)
