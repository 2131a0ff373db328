from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from storefront.auth.dependencies import require_roles
from storefront.core.config import Settings, get_settings
from storefront.database import get_db
from storefront.schemas import UserCreate, UserResponse, UserUpdate
from storefront.services import users

router = APIRouter(tags=['users'])


@router.post(
    '',
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles('admin'))],
)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return users.create_user(db, data, settings)


@router.get('', response_model=list[UserResponse], dependencies=[Depends(require_roles('owner'))])
def list_users(
    limit: int = Query(default=0, ge=0),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    return users.list_users(db, limit=limit, offset=offset)


@router.get('/{id_or_email}', response_model=UserResponse)
def get_user(id_or_email: str, db: Session = Depends(get_db)):
    return users.find_user(db, id_or_email)


@router.patch('/{user_id}', response_model=UserResponse, dependencies=[Depends(require_roles('admin'))])
def update_user(
    user_id: UUID,
    data: UserUpdate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return users.update_user(db, str(user_id), data, settings)


@router.delete(
    '/{user_id}',
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_roles('admin'))],
)
def remove_user(user_id: UUID, db: Session = Depends(get_db)):
    users.remove_user(db, str(user_id))
