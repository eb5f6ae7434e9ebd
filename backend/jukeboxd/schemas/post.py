"""
Pydantic schemas for posts and comments.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class PostCreate(BaseModel):
    """Schema for post creation."""
    songTitle: str
    artist: str
    body: str


class PostResponse(BaseModel):
    """Schema for post response."""
    id: str
    userId: str
    songTitle: str
    artist: str
    body: str
    comments: List[str] = []
    createdAt: Optional[datetime] = None


class CommentCreate(BaseModel):
    body: str


class CommentResponse(BaseModel):
    id: str
    postId: str
    userId: str
    body: str
    createdAt: Optional[datetime] = None


class PostDeleted(BaseModel):
    postId: str
    deleted: bool
