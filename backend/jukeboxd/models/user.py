"""
User document shape for the users collection.
"""
from typing import Any, Dict
from jukeboxd.core.utils import id_list


def new_user_document(
    username: str,
    email: str,
    hashed_password: str,
    bio: str,
    profile_picture: str
) -> Dict[str, Any]:
    """Build a fresh user document with empty relationship lists."""
    return {
        "username": username,
        "email": email,
        "hashedPassword": hashed_password,
        "userPosts": [],
        "userComments": [],
        "following": [],
        "followers": [],
        "bio": bio,
        "profilePicture": profile_picture,
    }


def serialize_user(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a stored user document into its boundary form (string ids)."""
    return {
        "id": str(doc["_id"]),
        "username": doc.get("username"),
        "email": doc.get("email"),
        "hashedPassword": doc.get("hashedPassword"),
        "userPosts": id_list(doc.get("userPosts")),
        "userComments": id_list(doc.get("userComments")),
        "following": id_list(doc.get("following")),
        "followers": id_list(doc.get("followers")),
        "bio": doc.get("bio"),
        "profilePicture": doc.get("profilePicture"),
    }
