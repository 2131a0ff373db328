"""Product catalog store and the transactional product update."""

import logging
import re
from collections.abc import Callable, Iterable

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.attributes import set_committed_value

from storefront.core.errors import ConflictError, NotFoundError, PersistenceError, ValidationError
from storefront.core.identifiers import parse_uuid
from storefront.database import SessionLocal, transaction_scope
from storefront.models.product import GENDERS, Product, ProductImage
from storefront.schemas import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

# Each matched character becomes one hyphen; runs are not collapsed.
SLUG_DISALLOWED = re.compile(r"""[~`!@#$%^&*()+={}\[\];:'"<>.,/\\?\s]""")


def normalize_slug(source: str) -> str:
    return SLUG_DISALLOWED.sub("-", source.lower())


def build_images(urls: Iterable[str]) -> list[ProductImage]:
    return [ProductImage(url=url) for url in urls]


def check_product(product: Product) -> None:
    if product.price is not None and product.price < 0:
        raise ValidationError("Product price cannot be negative.")
    if product.stock is not None and product.stock < 0:
        raise ValidationError("Product stock cannot be negative.")
    if product.gender not in GENDERS:
        raise ValidationError(f"Product gender must be one of: {', '.join(GENDERS)}.")
    if not product.slug:
        raise ValidationError("Product slug cannot be empty.")


def build_product(details: ProductCreate) -> Product:
    product = Product(
        title=details.title,
        price=details.price,
        description=details.description,
        slug=normalize_slug(details.slug or details.title),
        stock=details.stock,
        sizes=list(details.sizes),
        gender=details.gender,
        tags=list(details.tags),
    )
    product.images = build_images(details.images)
    check_product(product)
    return product


def create_product(db: Session, details: ProductCreate) -> Product:
    product = build_product(details)
    try:
        db.add(product)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Rejected product %s: %s", details.title, exc.orig)
        raise ConflictError(f"Product with title {details.title} or its slug already exists.") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error creating product %s", details.title)
        raise PersistenceError("Cannot create the product") from exc

    logger.info("Created product %s (%s)", product.id, product.slug)
    return product


def list_products(db: Session, limit: int = 0, offset: int = 0) -> list[Product]:
    """Return a page of products in insertion order.

    A ``limit`` of zero places no cap on the page size.
    """
    if limit < 0 or offset < 0:
        raise ValidationError("limit and offset must not be negative.")

    query = (
        select(Product)
        .options(selectinload(Product.images))
        .order_by(Product.created_at, Product.id)
        .offset(offset)
    )
    if limit:
        query = query.limit(limit)

    try:
        return list(db.scalars(query).all())
    except SQLAlchemyError as exc:
        logger.exception("Error finding product collection")
        raise PersistenceError("Cannot find products") from exc


def find_product(db: Session, term: str) -> Product:
    """Find one product by id, by case-insensitive title or by slug."""
    product_id = parse_uuid(term)
    if product_id:
        condition = Product.id == product_id
    else:
        condition = or_(func.upper(Product.title) == func.upper(term), Product.slug == term.lower())

    query = select(Product).options(selectinload(Product.images)).where(condition)
    try:
        product = db.scalars(query).first()
    except SQLAlchemyError as exc:
        logger.exception("Error finding product %s", term)
        raise PersistenceError(f"Cannot find product: {term}") from exc

    if product is None:
        raise NotFoundError(f"Product with term {term} does not exist")
    return product


def _preload(db: Session, product_id: str, details: ProductUpdate) -> Product:
    canonical_id = parse_uuid(product_id)
    product = db.get(Product, canonical_id) if canonical_id else None
    if product is None:
        raise NotFoundError(f"Product with id: {product_id} not found")

    changes = details.model_dump(exclude_unset=True, exclude={"images"})
    for field, value in changes.items():
        setattr(product, field, value)
    product.slug = normalize_slug(product.slug or product.title)
    check_product(product)
    return product


def _reattach_images(db: Session, product: Product) -> None:
    images = db.scalars(
        select(ProductImage).where(ProductImage.product_id == product.id).order_by(ProductImage.id)
    ).all()
    set_committed_value(product, "images", list(images))


def _delete_images(db: Session, product: Product) -> None:
    db.execute(
        delete(ProductImage).where(ProductImage.product_id == product.id),
        execution_options={"synchronize_session": False},
    )
    db.expire(product, ["images"])


def _replace_images(db: Session, product: Product, urls: list[str]) -> None:
    _delete_images(db, product)
    product.images = build_images(urls)


def update_product(
    product_id: str,
    details: ProductUpdate,
    session_factory: Callable[[], Session] = SessionLocal,
) -> Product:
    """Apply field changes and an optional full image replacement atomically.

    Without ``images`` the stored collection is kept as is. With ``images``
    (even an empty list) every stored image row is deleted and new rows are
    built in input order. Field changes and image rows commit together or
    not at all.
    """
    try:
        with transaction_scope(session_factory) as db:
            product = _preload(db, product_id, details)
            if details.images is None:
                _reattach_images(db, product)
            else:
                _replace_images(db, product, details.images)
            db.flush()
    except IntegrityError as exc:
        logger.warning("Rejected update of product %s: %s", product_id, exc.orig)
        raise ConflictError(f"Cannot update productId: {product_id}") from exc
    except SQLAlchemyError as exc:
        logger.exception("Error updating product %s", product_id)
        raise PersistenceError(f"Cannot update productId: {product_id}") from exc

    logger.info("Updated product %s", product_id)
    return product


def remove_product(db: Session, product_id: str) -> None:
    product = find_product(db, product_id)
    try:
        _delete_images(db, product)
        db.delete(product)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error deleting product %s", product_id)
        raise PersistenceError(f"Cannot remove productId: {product_id}") from exc
    logger.info("Removed product %s", product.id)
