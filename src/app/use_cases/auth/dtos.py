"""
Authentication Use Case DTOs (Data Transfer Objects)

Command and Response classes for the auth domain.
Response field aliases are the camelCase names exposed over HTTP.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities import User


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    anonymous_id is the client-side id whose content is merged on success.
    """

    email: str
    password: str
    display_name: Optional[str] = None
    anonymous_id: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Public user information; never carries the password hash"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    display_name: str = Field(serialization_alias="displayName")
    is_admin: bool = Field(serialization_alias="isAdmin")

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            display_name=user.display_name,
            is_admin=user.is_admin,
        )


class AuthResponse(BaseModel):
    """Response for register and login use cases"""

    token: str
    user: UserInfo


class ForgotPasswordResponse(BaseModel):
    """Response for forgot password use case - identical for every email"""

    success: bool = True


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    success: bool = True
