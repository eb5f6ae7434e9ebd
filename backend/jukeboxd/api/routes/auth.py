"""
Authentication routes for registration, login, and logout.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.database import Database
from jukeboxd.db.session import get_db
from jukeboxd.schemas.user import UserCreate, UserLogin, Token, UserResponse
from jukeboxd.core.security import create_access_token, decode_access_token
from jukeboxd.core.validation import confirm_pass
from jukeboxd.services import user_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: Database = Depends(get_db)):
    """Register a new user."""
    confirm_pass(user_data.password.strip(), user_data.confirm_password)
    return user_service.create_user(
        user_data.username,
        user_data.email,
        user_data.password,
        user_data.bio,
        user_data.profile_picture,
        db
    )


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: Database = Depends(get_db)):
    """Login and get JWT token."""
    user = user_service.login_user(credentials.email, credentials.password, db)
    access_token = create_access_token(data={"sub": user["email"], "user_id": user["id"]})
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/logout")
async def logout(token: str):
    """Logout; the client discards its token."""
    decoded = decode_access_token(token)
    if not decoded:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
    return {"message": "Logged out successfully"}
