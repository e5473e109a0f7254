from datetime import timedelta

from fastapi import APIRouter, Depends, Request, status

from leadintake.core.deps import get_current_user, get_user_service
from leadintake.core.exceptions import AuthenticationError
from leadintake.core.security import create_access_token
from leadintake.models.user import User
from leadintake.schemas.user import Token, UserCreate, UserLogin, UserOut
from leadintake.services.user_service import UserService

router = APIRouter()


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(user_create: UserCreate, user_service: UserService = Depends(get_user_service)):
    """Register a new user"""
    user = user_service.create_user(user_create)
    return UserOut(id=user.id, email=user.email)


@router.post("/login", response_model=Token)
def login(user_login: UserLogin, request: Request, user_service: UserService = Depends(get_user_service)):
    """Login user and return access token"""
    user = user_service.authenticate_user(user_login.email, user_login.password)
    if not user:
        raise AuthenticationError("Incorrect email or password")
    expires = timedelta(minutes=request.app.state.settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(data={"sub": user.email}, expires_delta=expires)
    return Token(access_token=access_token)


@router.get("/me", response_model=UserOut)
async def me(current_user: User = Depends(get_current_user)):
    return UserOut(id=current_user.id, email=current_user.email)
