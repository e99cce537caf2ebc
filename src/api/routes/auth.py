from typing import Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.api.error import ClientError, ServerError
from src.api.utils.jwt import TokenIssuer
from src.app.services.auth_settings import AuthSettings
from src.app.services.email_gateway import EmailMessage, IEmailGateway, deliver_email
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthResponse,
    ForgotPasswordResponse,
    ForgotPasswordUseCase,
    LoginUseCase,
    RegisterCommand,
    RegisterUseCase,
    ResetPasswordResponse,
    ResetPasswordUseCase,
    UserInfo,
)
from src.depends import (
    get_auth_settings,
    get_current_user,
    get_email_gateway,
    get_password_hasher,
    get_token_issuer,
    get_unit_of_work,
)
from src.libs.result import Error

router = APIRouter(prefix="/auth", tags=["Authentication"])

INVALID_TOKEN_ERROR = Error("INVALID_TOKEN", "Invalid or expired reset token")
INVALID_SESSION_ERROR = Error("INVALID_SESSION", "Invalid or expired token")

# Keeps the UTF-8 form within passlib's password size limit
MAX_PASSWORD_LENGTH = 1024


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    Password length is a business rule enforced by the use case.
    """

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., max_length=MAX_PASSWORD_LENGTH, description="User password")
    display_name: Optional[str] = Field(
        None, alias="displayName", max_length=255, description="Public display name"
    )
    user_id: Optional[str] = Field(
        None, alias="userId", max_length=255, description="Anonymous id to merge"
    )

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    User Registration

    Creates an account and returns a session token.
    Content created under userId (anonymous id) is merged into the account.

    Raises:
        - 400 Bad Request: Missing fields or password too short
        - 409 Conflict: Email already registered
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        email=request.email,
        password=request.password,
        display_name=request.display_name,
        anonymous_id=request.user_id,
    )

    use_case = RegisterUseCase(uow, hasher, token_issuer, settings)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(..., max_length=255, description="User email address")
    password: str = Field(..., max_length=MAX_PASSWORD_LENGTH, description="User password")
    user_id: Optional[str] = Field(
        None, alias="userId", max_length=255, description="Anonymous id to merge"
    )


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    """
    User Login

    Raises:
        - 401 Unauthorized: Invalid credentials (same response for unknown
          email and wrong password)
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, hasher, token_issuer)
    result = await use_case.execute(request.email, request.password, request.user_id)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(..., max_length=255, description="User email address")
    base_url: Optional[str] = Field(
        None, alias="baseUrl", max_length=2048, description="Origin for the reset link"
    )


@router.post(
    "/forgot-password", status_code=status.HTTP_200_OK, response_model=ForgotPasswordResponse
)
async def forgot_password(
    request: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    email_gateway: IEmailGateway = Depends(get_email_gateway),
):
    """
    Forgot Password

    Issues a reset token and emails a reset link after the response is sent.

    Security:
        - No email enumeration (same response for every email string)
        - Email delivery errors are logged, never returned

    Returns:
        - 200 OK: Always {"success": true}
        - 500 Internal Server Error: Server error
    """

    def schedule_email(message: EmailMessage) -> None:
        background_tasks.add_task(deliver_email, email_gateway, message)

    use_case = ForgotPasswordUseCase(uow, settings, schedule_email)
    result = await use_case.execute(request.email, request.base_url)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(..., max_length=255, description="Email the token was sent to")
    token: str = Field(..., description="Password reset token from email")
    new_password: str = Field(
        ..., alias="newPassword", max_length=MAX_PASSWORD_LENGTH, description="New password"
    )


@router.post(
    "/reset-password", status_code=status.HTTP_200_OK, response_model=ResetPasswordResponse
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Reset Password

    Consumes a reset token and sets a new password.

    Security:
        - Unknown, expired and already used tokens share one 401 response

    Raises:
        - 400 Bad Request: Password too short
        - 401 Unauthorized: Invalid or expired reset token
        - 500 Internal Server Error: Server error
    """
    use_case = ResetPasswordUseCase(uow, hasher, settings)
    result = await use_case.execute(request.email, request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("INVALID_TOKEN", "TOKEN_USED", "TOKEN_EXPIRED"):
            raise ClientError(INVALID_TOKEN_ERROR, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def me(
    claims: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current User

    Resolves the bearer session token to the stored user.

    Raises:
        - 401 Unauthorized: Token invalid/expired or the user no longer exists
    """
    try:
        user_id = UUID(str(claims.get("sub")))
    except ValueError:
        raise ClientError(INVALID_SESSION_ERROR, status_code=status.HTTP_401_UNAUTHORIZED)

    async with uow:
        user = await uow.users.get_by_id(user_id)
        if user is None:
            raise ClientError(INVALID_SESSION_ERROR, status_code=status.HTTP_401_UNAUTHORIZED)

        return UserInfo.from_user(user)
