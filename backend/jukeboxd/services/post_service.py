"""
Post store: song posts and their comments.
"""
import logging
from typing import Any, Dict, List
from pymongo import DESCENDING
from pymongo.database import Database
from jukeboxd.core import validation
from jukeboxd.core.errors import NotFoundError, StoreError
from jukeboxd.core.utils import to_object_id
from jukeboxd.db.session import comments, posts, users
from jukeboxd.models.post import (
    new_comment_document,
    new_post_document,
    serialize_comment,
    serialize_post,
)

logger = logging.getLogger(__name__)


def _require_user(user_id: str, db: Database):
    oid = to_object_id(user_id, "user id")
    if users(db).find_one({"_id": oid}, {"_id": 1}) is None:
        raise NotFoundError("No user with that id")
    return oid


def create_post(user_id: str, song_title: str, artist: str, body: str, db: Database) -> Dict[str, Any]:
    """Create a post and link it from the owner's userPosts."""
    owner = _require_user(user_id, db)
    song_title = validation.check_text(song_title, "Song title", 100)
    artist = validation.check_text(artist, "Artist", 100)
    body = validation.check_text(body, "Post", 1000)

    insert_info = posts(db).insert_one(new_post_document(owner, song_title, artist, body))
    if not insert_info.acknowledged or not insert_info.inserted_id:
        raise StoreError("Could not add post!")

    users(db).update_one({"_id": owner}, {"$push": {"userPosts": insert_info.inserted_id}})
    logger.info(f"User {owner} created post {insert_info.inserted_id}")
    return get_post_by_id(str(insert_info.inserted_id), db)


def get_post_by_id(post_id: str, db: Database) -> Dict[str, Any]:
    post = posts(db).find_one({"_id": to_object_id(post_id, "post id")})
    if post is None:
        raise NotFoundError("No post with that id")
    return serialize_post(post)


def get_all_posts(db: Database) -> List[Dict[str, Any]]:
    """All posts, newest first."""
    return [serialize_post(p) for p in posts(db).find({}).sort("createdAt", DESCENDING)]


def get_posts_by_user(user_id: str, db: Database) -> List[Dict[str, Any]]:
    owner = to_object_id(user_id, "user id")
    cursor = posts(db).find({"user_id": owner}).sort("createdAt", DESCENDING)
    return [serialize_post(p) for p in cursor]


def get_comments_for_post(post_id: str, db: Database) -> List[Dict[str, Any]]:
    oid = to_object_id(post_id, "post id")
    return [serialize_comment(c) for c in comments(db).find({"post_id": oid}).sort("createdAt", 1)]


def add_comment(post_id: str, user_id: str, body: str, db: Database) -> Dict[str, Any]:
    """Comment on a post and link the comment from the post and its author."""
    post_oid = to_object_id(post_id, "post id")
    author = _require_user(user_id, db)
    body = validation.check_text(body, "Comment", 500)
    if posts(db).find_one({"_id": post_oid}, {"_id": 1}) is None:
        raise NotFoundError("No post with that id")

    insert_info = comments(db).insert_one(new_comment_document(post_oid, author, body))
    if not insert_info.acknowledged or not insert_info.inserted_id:
        raise StoreError("Could not add comment!")

    comment_id = insert_info.inserted_id
    posts(db).update_one({"_id": post_oid}, {"$push": {"comments": comment_id}})
    users(db).update_one({"_id": author}, {"$push": {"userComments": comment_id}})
    return serialize_comment(comments(db).find_one({"_id": comment_id}))


def remove_post(post_id: str, db: Database) -> Dict[str, Any]:
    """Delete a post, its comments, and every reference to them."""
    oid = to_object_id(post_id, "post id")
    post = posts(db).find_one({"_id": oid})
    if post is None:
        raise NotFoundError(f"Could not delete post with id of {post_id}")

    post_comments = list(comments(db).find({"post_id": oid}, {"_id": 1}))
    comment_ids = [c["_id"] for c in post_comments]
    if comment_ids:
        users(db).update_many(
            {"userComments": {"$in": comment_ids}},
            {"$pullAll": {"userComments": comment_ids}}
        )
        comments(db).delete_many({"_id": {"$in": comment_ids}})

    users(db).update_one({"_id": post["user_id"]}, {"$pull": {"userPosts": oid}})
    posts(db).delete_one({"_id": oid})
    logger.info(f"Removed post {oid} with {len(comment_ids)} comments")
    return {"postId": str(oid), "deleted": True}


def remove_comments_by_user(user_id: str, db: Database) -> int:
    """Delete every comment written by the user and unlink it from its post."""
    author = to_object_id(user_id, "user id")
    authored = list(comments(db).find({"user_id": author}, {"_id": 1}))
    comment_ids = [c["_id"] for c in authored]
    if not comment_ids:
        return 0

    posts(db).update_many(
        {"comments": {"$in": comment_ids}},
        {"$pullAll": {"comments": comment_ids}}
    )
    users(db).update_one({"_id": author}, {"$pullAll": {"userComments": comment_ids}})
    comments(db).delete_many({"_id": {"$in": comment_ids}})
    return len(comment_ids)
