"""
Shared route dependencies.
"""
from typing import Any, Dict
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.database import Database
from jukeboxd.core.errors import JukeboxdError
from jukeboxd.core.security import decode_access_token
from jukeboxd.db.session import get_db
from jukeboxd.services import user_service

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Database = Depends(get_db)
) -> Dict[str, Any]:
    """Resolve the bearer token to the logged-in user."""
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized

    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("user_id"):
        raise unauthorized

    try:
        return user_service.get_user_by_id(payload["user_id"], db)
    except JukeboxdError:
        # Token for a deleted user or a malformed id
        raise unauthorized
