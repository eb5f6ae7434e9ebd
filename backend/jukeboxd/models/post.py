"""
Post and comment document shapes.
"""
from datetime import datetime, timezone
from typing import Any, Dict
from bson import ObjectId
from jukeboxd.core.utils import id_list


def new_post_document(user_id: ObjectId, song_title: str, artist: str, body: str) -> Dict[str, Any]:
    return {
        "user_id": user_id,
        "songTitle": song_title,
        "artist": artist,
        "body": body,
        "comments": [],
        "createdAt": datetime.now(timezone.utc),
    }


def new_comment_document(post_id: ObjectId, user_id: ObjectId, body: str) -> Dict[str, Any]:
    return {
        "post_id": post_id,
        "user_id": user_id,
        "body": body,
        "createdAt": datetime.now(timezone.utc),
    }


def serialize_post(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": str(doc["_id"]),
        "userId": str(doc["user_id"]),
        "songTitle": doc.get("songTitle"),
        "artist": doc.get("artist"),
        "body": doc.get("body"),
        "comments": id_list(doc.get("comments")),
        "createdAt": doc.get("createdAt"),
    }


def serialize_comment(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": str(doc["_id"]),
        "postId": str(doc["post_id"]),
        "userId": str(doc["user_id"]),
        "body": doc.get("body"),
        "createdAt": doc.get("createdAt"),
    }
