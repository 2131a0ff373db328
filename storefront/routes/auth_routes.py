from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storefront.auth.dependencies import require_roles
from storefront.core.config import Settings, get_settings
from storefront.database import get_db
from storefront.models.user import User
from storefront.schemas import AuthResponse, SignInRequest, UserCreate, UserResponse
from storefront.services import auth

router = APIRouter(tags=['auth'])


@router.post('/sign-up', response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    data: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return auth.sign_up(db, data, settings)


@router.post('/sign-in', response_model=AuthResponse)
def sign_in(
    data: SignInRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return auth.sign_in(db, data.email, data.password, settings)


@router.get('/profile', response_model=UserResponse)
def profile(
    current_user: User = Depends(require_roles('admin')),
    db: Session = Depends(get_db),
):
    return auth.profile(db, current_user.id)
