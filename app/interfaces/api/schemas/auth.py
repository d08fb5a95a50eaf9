"""Authentication related schemas."""

from pydantic import BaseModel, EmailStr, Field


class Token(BaseModel):
    access_token: str
    token_type: str
    role: str


class RegisterRequest(BaseModel):
    email: EmailStr = Field(..., description="E-mail usado para entrar no sistema")
    password: str = Field(..., min_length=6)
    name: str | None = Field(default=None, max_length=100)


__all__ = ["RegisterRequest", "Token"]
