"""
Database initialization script.
"""
from jukeboxd.core.config import settings
from jukeboxd.db.session import client, init_db

if __name__ == "__main__":
    print("Initializing database...")
    init_db(client[settings.MONGO_DB_NAME])
    print("Database initialized successfully!")
