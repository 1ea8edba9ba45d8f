from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class UserName(BaseModel):
    name: str

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    id: int
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True


# Auth schemas
class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    user: UserSummary
    token: str


class TokenRefreshResponse(BaseModel):
    token: str
    success: bool = True


class PasswordResetRequest(BaseModel):
    email: Optional[str] = None


class PasswordResetConfirm(BaseModel):
    token: Optional[str] = None
    password: Optional[str] = None


# Admin user management
class UserCreate(BaseModel):
    name: str
    email: str
    password: str
    role: str = "STUDENT"
    # profile fields, used according to role
    bio: Optional[str] = None
    bio_fa: Optional[str] = None
    specialties: Optional[str] = None
    phone: Optional[str] = None
    photo: Optional[str] = None


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    bio: Optional[str] = None
    bio_fa: Optional[str] = None
    specialties: Optional[str] = None
    phone: Optional[str] = None
    photo: Optional[str] = None


class UserResponse(UserSummary):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
