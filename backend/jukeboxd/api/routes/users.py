"""
User management and follow routes.
"""
from fastapi import APIRouter, Depends, status
from pymongo.database import Database
from typing import Any, Dict, List
from jukeboxd.db.session import get_db
from jukeboxd.schemas.user import UserDeleted, UserResponse, UserSummary, UserUpdate
from jukeboxd.schemas.post import PostResponse
from jukeboxd.api.dependencies import get_current_user
from jukeboxd.core.validation import list_profile_pictures
from jukeboxd.services import post_service, user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserSummary])
async def list_users(db: Database = Depends(get_db)):
    """List every user's id and username."""
    return user_service.get_all_users(db)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: Dict[str, Any] = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_current_user(
    user_data: UserUpdate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db)
):
    """Update some fields of the current user."""
    return user_service.update_user_patch(
        current_user["id"],
        user_data.model_dump(exclude_unset=True),
        db
    )


@router.delete("/me", response_model=UserDeleted)
async def delete_current_user(
    current_user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db)
):
    """Delete the current account with its posts and follow links."""
    return user_service.remove_user(current_user["id"], db)


@router.get("/profile-pictures", response_model=List[str])
async def get_profile_pictures():
    """Profile pictures available at registration."""
    return list_profile_pictures()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, db: Database = Depends(get_db)):
    """Get user by ID."""
    return user_service.get_user_by_id(user_id, db)


@router.get("/{user_id}/posts", response_model=List[PostResponse])
async def get_user_posts(user_id: str, db: Database = Depends(get_db)):
    """Posts written by a user, newest first."""
    user_service.get_user_by_id(user_id, db)
    return post_service.get_posts_by_user(user_id, db)


@router.post("/{user_id}/follow", response_model=UserResponse, status_code=status.HTTP_200_OK)
async def follow(
    user_id: str,
    current_user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db)
):
    """Follow a user. Returns the current user."""
    return user_service.follow_user(current_user["id"], user_id, db)


@router.delete("/{user_id}/follow", response_model=UserResponse)
async def unfollow(
    user_id: str,
    current_user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db)
):
    """Stop following a user. Returns the current user."""
    return user_service.unfollow_user(current_user["id"], user_id, db)
