"""
Authentication Use Cases

Registration, login and password reset business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .forgot_password_use_case import ForgotPasswordUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    RegisterCommand,
    AuthResponse,
    UserInfo,
    ForgotPasswordResponse,
    ResetPasswordResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "AuthResponse",
    "ForgotPasswordResponse",
    "ResetPasswordResponse",
    # DTOs - Nested Models
    "UserInfo",
]
