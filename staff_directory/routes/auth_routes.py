from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, field_validator

from staff_directory.auth.dependencies import get_auth_context, get_directory_service, to_http_exception
from staff_directory.auth.gate import AuthContext
from staff_directory.core.errors import DirectoryError
from staff_directory.models.user import Role
from staff_directory.services.directory_service import DirectoryService

router = APIRouter(tags=['auth'])


class LoginRequest(BaseModel):
    username: str
    password: str

    @field_validator('username')
    @classmethod
    def validate_username(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('Username is required.')
        return value


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    role: Role


class AuthPayloadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    token: str
    user: UserResponse


@router.post('/login', response_model=AuthPayloadResponse)
def login(data: LoginRequest, service: DirectoryService = Depends(get_directory_service)):
    try:
        return service.login(data.username, data.password)
    except DirectoryError as exc:
        raise to_http_exception(exc) from exc


@router.get('/me', response_model=UserResponse | None)
def me(
    context: AuthContext = Depends(get_auth_context),
    service: DirectoryService = Depends(get_directory_service),
):
    return service.me(context)
