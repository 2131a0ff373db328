from collections.abc import Callable

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from storefront.database import get_db, get_session_factory
from storefront.schemas import ProductCreate, ProductResponse, ProductUpdate
from storefront.services import products

router = APIRouter(tags=['products'])


@router.post('', response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(data: ProductCreate, db: Session = Depends(get_db)):
    return products.create_product(db, data)


@router.get('', response_model=list[ProductResponse])
def list_products(
    limit: int = Query(default=0, ge=0),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    return products.list_products(db, limit=limit, offset=offset)


@router.get('/{term}', response_model=ProductResponse)
def get_product(term: str, db: Session = Depends(get_db)):
    return products.find_product(db, term)


@router.patch('/{product_id}', response_model=ProductResponse)
def update_product(
    product_id: str,
    data: ProductUpdate,
    session_factory: Callable[[], Session] = Depends(get_session_factory),
):
    return products.update_product(product_id, data, session_factory)


@router.delete('/{product_id}', status_code=status.HTTP_204_NO_CONTENT)
def remove_product(product_id: str, db: Session = Depends(get_db)):
    products.remove_product(db, product_id)
