"""
Pydantic schemas for User entity and authentication payloads.
"""
from pydantic import AliasChoices, BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class UserCreate(CamelModel):
    """Schema for user signup."""
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6)
    recovery_question: str = Field(
        min_length=5,
        max_length=255,
        validation_alias=AliasChoices("recoveryQuestion", "securityQuestion", "recovery_question"),
    )
    recovery_answer: str = Field(
        min_length=2,
        validation_alias=AliasChoices("recoveryAnswer", "securityAnswer", "recovery_answer"),
    )


class UserLogin(CamelModel):
    """Schema for user login."""
    email: EmailStr
    password: str = Field(min_length=6)


class PasswordReset(CamelModel):
    """Schema for resetting a password with the recovery answer."""
    email: EmailStr
    recovery_answer: str = Field(
        min_length=1,
        validation_alias=AliasChoices("recoveryAnswer", "securityAnswer", "recovery_answer"),
    )
    new_password: str = Field(min_length=6)


class UserResponse(CamelModel):
    """Public user shape."""
    id: str
    name: str
    email: str
    created_at: str


class AuthResponse(BaseModel):
    """Schema for signup/login response."""
    user: UserResponse
    token: str


class CurrentUserResponse(BaseModel):
    user: UserResponse


class SecurityQuestionResponse(BaseModel):
    question: str


class MessageResponse(BaseModel):
    message: str
