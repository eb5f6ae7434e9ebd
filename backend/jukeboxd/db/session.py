"""
Document store connection management.
"""
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from jukeboxd.core.config import settings

USERS = "users"
POSTS = "posts"
COMMENTS = "comments"

# MongoClient connects lazily on first operation
client = MongoClient(
    settings.MONGO_URL,
    serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS,
    tz_aware=True,
)


def get_db() -> Database:
    """Dependency for getting the application database."""
    yield client[settings.MONGO_DB_NAME]


def users(db: Database) -> Collection:
    return db[USERS]


def posts(db: Database) -> Collection:
    return db[POSTS]


def comments(db: Database) -> Collection:
    return db[COMMENTS]


def init_db(db: Database) -> None:
    """Create the indexes the stores rely on."""
    users(db).create_index("email", unique=True)
    posts(db).create_index("user_id")
    posts(db).create_index("createdAt")
    comments(db).create_index("post_id")
    comments(db).create_index("user_id")
