from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from staff_directory.auth.gate import AuthContext, InvalidToken
from staff_directory.core import config
from staff_directory.core.errors import DirectoryError
from staff_directory.services.directory_service import DirectoryService

security = HTTPBearer(auto_error=False)


def get_directory_service(request: Request) -> DirectoryService:
    return request.app.state.directory


def get_auth_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    service: DirectoryService = Depends(get_directory_service),
) -> AuthContext:
    token = credentials.credentials if credentials else None
    context = service.resolve_context(token)
    if isinstance(context, InvalidToken) and config.REJECT_INVALID_TOKENS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=context.reason,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return context


def to_http_exception(exc: DirectoryError) -> HTTPException:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return HTTPException(status_code=exc.status_code, detail=exc.message, headers=headers)
