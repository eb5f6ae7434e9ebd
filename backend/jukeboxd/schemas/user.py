"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class UserSummary(BaseModel):
    """Schema for user listings."""
    id: str
    username: str


class UserCreate(BaseModel):
    """Schema for user registration."""
    username: str
    email: str
    password: str
    confirm_password: str = Field(alias="confirmPassword")
    bio: str
    profile_picture: str = Field(alias="profilePicture")


class UserUpdate(BaseModel):
    """Schema for partial user update."""
    username: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    profilePicture: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Schema for user response."""
    id: str
    username: str
    email: str
    bio: str
    profilePicture: str
    userPosts: List[str] = []
    userComments: List[str] = []
    following: List[str] = []
    followers: List[str] = []


class UserDeleted(BaseModel):
    userName: str
    deleted: bool


class UserLogin(BaseModel):
    """Schema for user login."""
    email: str
    password: str


class Token(BaseModel):
    """Schema for JWT token response."""
    access_token: str
    token_type: str = "bearer"
