"""
Song post and comment routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.database import Database
from typing import Any, Dict, List
from jukeboxd.db.session import get_db
from jukeboxd.schemas.post import (
    CommentCreate, CommentResponse, PostCreate, PostDeleted, PostResponse
)
from jukeboxd.api.dependencies import get_current_user
from jukeboxd.services import post_service

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=List[PostResponse])
async def list_posts(db: Database = Depends(get_db)):
    """Get the post feed (latest first)."""
    return post_service.get_all_posts(db)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db)
):
    """Post about a song."""
    return post_service.create_post(
        current_user["id"],
        post_data.songTitle,
        post_data.artist,
        post_data.body,
        db
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, db: Database = Depends(get_db)):
    """Get post by ID."""
    return post_service.get_post_by_id(post_id, db)


@router.get("/{post_id}/comments", response_model=List[CommentResponse])
async def list_comments(post_id: str, db: Database = Depends(get_db)):
    """Comments on a post, oldest first."""
    post_service.get_post_by_id(post_id, db)
    return post_service.get_comments_for_post(post_id, db)


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def comment_on_post(
    post_id: str,
    comment_data: CommentCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db)
):
    """Comment on a post."""
    return post_service.add_comment(post_id, current_user["id"], comment_data.body, db)


@router.delete("/{post_id}", response_model=PostDeleted)
async def delete_post(
    post_id: str,
    current_user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db)
):
    """Delete one of your own posts."""
    post = post_service.get_post_by_id(post_id, db)
    if post["userId"] != current_user["id"]:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own posts"
        )
    return post_service.remove_post(post_id, db)
