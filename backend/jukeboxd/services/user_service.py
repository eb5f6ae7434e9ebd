"""
Account store: create, read, update, delete and authenticate users,
and keep follower/following lists symmetric.
"""
import logging
import threading
from typing import Any, Dict, List, Optional
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError
from jukeboxd.core import validation
from jukeboxd.core.errors import (
    ConflictError,
    InputValidationError,
    InvalidCredentialsError,
    NotFoundError,
    StoreError,
)
from jukeboxd.core.security import get_password_hash, verify_password
from jukeboxd.core.utils import to_object_id
from jukeboxd.db.session import posts, users
from jukeboxd.models.user import new_user_document, serialize_user
from jukeboxd.services import post_service

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Either the email address or password is invalid"
DUPLICATE_EMAIL = "There is already a user with this email address."
PATCHABLE_FIELDS = {"username", "email", "bio", "profilePicture", "password"}

# Guards both-sided follow/unfollow updates within this process
_relationship_lock = threading.Lock()


def create_user(
    username: str,
    email: str,
    raw_password: str,
    bio: str,
    profile_picture: str,
    db: Database
) -> Dict[str, Any]:
    """Validate, hash the password, insert and return the new user."""
    username = validation.check_username(username)
    email = validation.check_email(email).lower()
    raw_password = validation.check_pass(raw_password)
    bio = validation.check_bio(bio)
    profile_picture = validation.check_profile_pic(profile_picture)

    hashed = get_password_hash(raw_password)
    new_user = new_user_document(username, email, hashed, bio, profile_picture)

    user_collection = users(db)
    if user_collection.find_one({"email": email}, {"_id": 1}) is not None:
        raise ConflictError(DUPLICATE_EMAIL)

    try:
        insert_info = user_collection.insert_one(new_user)
    except DuplicateKeyError:
        # Lost a race with a concurrent registration; the unique index caught it
        raise ConflictError(DUPLICATE_EMAIL)

    if not insert_info.acknowledged or not insert_info.inserted_id:
        raise StoreError("Could not add user!")

    new_id = str(insert_info.inserted_id)
    logger.info(f"Created user {new_id} ({username})")
    return get_user_by_id(new_id, db)


def get_all_users(db: Database) -> List[Dict[str, str]]:
    """Return the id and username of every user."""
    cursor = users(db).find({}, {"_id": 1, "username": 1})
    return [{"id": str(user["_id"]), "username": user.get("username")} for user in cursor]


def _get_user_document(user_id, db: Database) -> Dict[str, Any]:
    user = users(db).find_one({"_id": to_object_id(user_id, "user id")})
    if user is None:
        raise NotFoundError("No user with that id")
    return user


def get_user_by_id(user_id: str, db: Database) -> Dict[str, Any]:
    """Get the user information from the db based on the id."""
    return serialize_user(_get_user_document(user_id, db))


def remove_user(user_id: str, db: Database) -> Dict[str, Any]:
    """
    Remove a user and everything that references them.

    Steps run in order and each is a no-op once applied, so retrying after
    a failure part-way through finishes the deletion:
      1. pull the user from every ``following`` list
      2. pull the user from every ``followers`` list
      3. remove every post the user created (with its comments)
      4. remove the user's comments on other people's posts
      5. delete the user record
    """
    user = _get_user_document(user_id, db)
    id_to_remove = user["_id"]
    user_name = user.get("username")
    user_collection = users(db)

    # Held until the record is gone so a concurrent follow cannot re-add an edge
    with _relationship_lock:
        user_collection.update_many(
            {"following": id_to_remove},
            {"$pull": {"following": id_to_remove}}
        )
        user_collection.update_many(
            {"followers": id_to_remove},
            {"$pull": {"followers": id_to_remove}}
        )
        logger.info(f"Detached user {id_to_remove} from follower/following lists")

        posts_to_remove = list(posts(db).find({"user_id": id_to_remove}, {"_id": 1}))
        for post in posts_to_remove:
            post_service.remove_post(str(post["_id"]), db)
        removed_comments = post_service.remove_comments_by_user(str(id_to_remove), db)
        logger.info(
            f"Removed {len(posts_to_remove)} posts and {removed_comments} comments "
            f"of user {id_to_remove}"
        )

        # finally... we delete the user
        deletion_info = user_collection.find_one_and_delete({"_id": id_to_remove})
    if deletion_info is None:
        raise NotFoundError(f"Could not delete user with id of {user_id}")

    logger.info(f"Deleted user {id_to_remove} ({user_name})")
    return {"userName": user_name, "deleted": True}


def _push_relationship(field: str, user_to_update: str, other_id: str, db: Database) -> Dict[str, Any]:
    target = to_object_id(user_to_update, "user id")
    other = to_object_id(other_id, "user id")
    updated = users(db).find_one_and_update(
        {"_id": target},
        {"$addToSet": {field: other}},
        return_document=ReturnDocument.AFTER
    )
    if updated is None:
        raise NotFoundError(f"Could not follow user with id of {user_to_update}")
    return serialize_user(updated)


def update_followers(user_to_update: str, new_follower_id: str, db: Database) -> Dict[str, Any]:
    """Add one id to the target's followers. Use follow_user to update both sides."""
    return _push_relationship("followers", user_to_update, new_follower_id, db)


def update_following(user_to_update: str, new_following_id: str, db: Database) -> Dict[str, Any]:
    """Add one id to the target's following. Use follow_user to update both sides."""
    return _push_relationship("following", user_to_update, new_following_id, db)


def _check_pair(follower_id: str, followee_id: str, db: Database):
    follower = to_object_id(follower_id, "user id")
    followee = to_object_id(followee_id, "user id")
    if follower == followee:
        raise InputValidationError("You cannot follow yourself.")
    found = users(db).count_documents({"_id": {"$in": [follower, followee]}})
    if found != 2:
        missing = followee_id if users(db).find_one({"_id": follower}, {"_id": 1}) else follower_id
        raise NotFoundError(f"Could not follow user with id of {missing}")
    return follower, followee


def follow_user(follower_id: str, followee_id: str, db: Database) -> Dict[str, Any]:
    """Make ``follower_id`` follow ``followee_id``, updating both records."""
    with _relationship_lock:
        follower, followee = _check_pair(follower_id, followee_id, db)
        user_collection = users(db)
        user_collection.update_one({"_id": follower}, {"$addToSet": {"following": followee}})
        user_collection.update_one({"_id": followee}, {"$addToSet": {"followers": follower}})
    logger.info(f"User {follower} now follows {followee}")
    return get_user_by_id(follower_id, db)


def unfollow_user(follower_id: str, followee_id: str, db: Database) -> Dict[str, Any]:
    """Undo follow_user. Unfollowing someone you don't follow is a no-op."""
    with _relationship_lock:
        follower, followee = _check_pair(follower_id, followee_id, db)
        user_collection = users(db)
        user_collection.update_one({"_id": follower}, {"$pull": {"following": followee}})
        user_collection.update_one({"_id": followee}, {"$pull": {"followers": follower}})
    logger.info(f"User {follower} unfollowed {followee}")
    return get_user_by_id(follower_id, db)


def update_user_put(
    user_id: str,
    user_post: Optional[str],
    user_comment: Optional[str],
    friend: Optional[str],
    db: Database
) -> Dict[str, Any]:
    """Append a post reference, a comment reference and a followed user."""
    user = _get_user_document(user_id, db)
    if friend is not None:
        # Reject a missing or self friend before anything is written
        _check_pair(user_id, friend, db)

    pushes = {}
    if user_post is not None:
        pushes["userPosts"] = to_object_id(user_post, "post id")
    if user_comment is not None:
        pushes["userComments"] = to_object_id(user_comment, "comment id")
    if pushes:
        updated = users(db).find_one_and_update(
            {"_id": user["_id"]},
            {"$push": pushes},
            return_document=ReturnDocument.AFTER
        )
        if updated is None:
            raise NotFoundError("Could not update user successfully")

    if friend is not None:
        follow_user(user_id, friend, db)

    return get_user_by_id(user_id, db)


def _validate_patch(user_id, user_info: Dict[str, Any], db: Database) -> Dict[str, Any]:
    if not user_info:
        raise InputValidationError("You must provide at least one field to update")
    unknown = set(user_info) - PATCHABLE_FIELDS
    if unknown:
        raise InputValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

    updates = {}
    if "username" in user_info:
        updates["username"] = validation.check_username(user_info["username"])
    if "bio" in user_info:
        updates["bio"] = validation.check_bio(user_info["bio"])
    if "profilePicture" in user_info:
        updates["profilePicture"] = validation.check_profile_pic(user_info["profilePicture"])
    if "password" in user_info:
        updates["hashedPassword"] = get_password_hash(validation.check_pass(user_info["password"]))
    if "email" in user_info:
        email = validation.check_email(user_info["email"]).lower()
        clash = users(db).find_one({"email": email, "_id": {"$ne": user_id}}, {"_id": 1})
        if clash is not None:
            raise ConflictError(DUPLICATE_EMAIL)
        updates["email"] = email
    return updates


def update_user_patch(user_id: str, user_info: Dict[str, Any], db: Database) -> Dict[str, Any]:
    """Merge the given fields into the user; unspecified fields are untouched."""
    oid = to_object_id(user_id, "user id")
    updates = _validate_patch(oid, user_info, db)
    try:
        updated_info = users(db).find_one_and_update(
            {"_id": oid},
            {"$set": updates},
            return_document=ReturnDocument.AFTER
        )
    except DuplicateKeyError:
        raise ConflictError(DUPLICATE_EMAIL)

    if updated_info is None:
        raise NotFoundError("Could not update user successfully")

    logger.info(f"Updated user {oid}: {', '.join(sorted(updates))}")
    return serialize_user(updated_info)


def login_user(email_address: str, password: str, db: Database) -> Dict[str, Any]:
    """
    Check the credentials submitted by the login form.
    A wrong email and a wrong password produce the same error.
    """
    if not email_address or not password:
        raise InvalidCredentialsError(INVALID_CREDENTIALS)

    user = users(db).find_one({"email": email_address.strip().lower()})
    if user is None or not verify_password(password.strip(), user["hashedPassword"]):
        logger.warning("Rejected login attempt")
        raise InvalidCredentialsError(INVALID_CREDENTIALS)

    return {
        "id": str(user["_id"]),
        "username": user["username"],
        "email": user["email"],
        "hashedPassword": user["hashedPassword"],
    }
