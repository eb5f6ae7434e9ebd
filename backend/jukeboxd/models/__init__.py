"""Models package - document builders and serializers for each collection."""
from jukeboxd.models.user import new_user_document, serialize_user
from jukeboxd.models.post import (
    new_comment_document,
    new_post_document,
    serialize_comment,
    serialize_post,
)

__all__ = [
    "new_user_document",
    "serialize_user",
    "new_post_document",
    "serialize_post",
    "new_comment_document",
    "serialize_comment",
]
