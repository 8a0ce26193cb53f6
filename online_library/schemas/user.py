from pydantic import BaseModel, ConfigDict, EmailStr, Field

from online_library.models.enum import UserRole


class UserCreate(BaseModel):
    """Schema for creating a user out of band"""
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=8, max_length=72, description="Password")
    role: UserRole = Field(default=UserRole.CLIENT)


class UserOut(BaseModel):
    """Schema for returning a user (no password)"""
    id: int
    email: EmailStr
    role: UserRole

    model_config = ConfigDict(from_attributes=True)
