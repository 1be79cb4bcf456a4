from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

Papel = Literal["admin", "manager", "operator", "viewer"]


class LoginRequest(BaseModel):
    """Username/password credentials."""
    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class UserRead(BaseModel):
    """User read model (never includes the password hash)."""
    id: UUID = Field(..., description="User ID")
    username: str = Field(..., description="Login name")
    email: str = Field(..., description="User email")
    nome: str = Field(..., description="Display name")
    papel: str = Field(..., description="Role: admin, manager, operator or viewer")
    ativo: bool = Field(..., description="Active flag")
    permissoes_customizadas: Optional[List[str]] = Field(default_factory=list, description="Extra permission codes")
    created_at: datetime = Field(..., description="Created timestamp")
    updated_at: datetime = Field(..., description="Updated timestamp")

    class Config:
        from_attributes = True


class UserListItem(BaseModel):
    """Compact user listing entry."""
    id: UUID = Field(...)
    username: str = Field(...)
    nome: str = Field(...)
    papel: str = Field(...)
    ativo: bool = Field(...)
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Authenticated user and its session token."""
    user: UserRead = Field(..., description="Authenticated user")
    token: str = Field(..., description="Bearer session token")


class UserCreate(BaseModel):
    """Admin create user payload."""
    username: str = Field(..., min_length=3, description="Login name")
    email: EmailStr = Field(..., description="Email")
    nome: str = Field(..., min_length=1, description="Display name")
    password: str = Field(..., min_length=6, description="Password")
    papel: Papel = Field("operator", description="Role")
    ativo: bool = Field(True)
    permissoes_customizadas: List[str] = Field(default_factory=list)


class UserUpdate(BaseModel):
    """Admin update user payload."""
    email: Optional[EmailStr] = Field(None)
    nome: Optional[str] = Field(None, min_length=1)
    papel: Optional[Papel] = Field(None)
    ativo: Optional[bool] = Field(None)
    permissoes_customizadas: Optional[List[str]] = Field(None)


class PasswordReset(BaseModel):
    """New password for a user."""
    password: str = Field(..., min_length=6, description="New password")
