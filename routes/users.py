import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from database import get_session
from middleware.auth import verify_jwt_middleware
from schemas import LoginResponse, UserLogin, UserRegister, UserResponse
from services.user_service import UserService

router = APIRouter(prefix="/user")


@router.post("/register", response_model=LoginResponse)
def register(
    user_data: UserRegister,
    session: Session = Depends(get_session)
) -> LoginResponse:
    """
    Register a new user and return an access token

    Args:
        user_data: Username, email and password
        session: Database session

    Returns:
        Token plus the public user profile
    """
    return UserService(session).register(user_data)


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    session: Session = Depends(get_session)
) -> LoginResponse:
    """
    Authenticate with username or email and return an access token

    The same 401 is returned whether the user is unknown or the password is wrong.
    """
    return UserService(session).login(credentials)


@router.get("/profile", response_model=UserResponse)
def get_profile(
    user_id: uuid.UUID = Depends(verify_jwt_middleware),
    session: Session = Depends(get_session)
) -> UserResponse:
    """Profile of the authenticated user"""
    user = UserService(session).get_profile(user_id)
    return UserResponse.model_validate(user)
