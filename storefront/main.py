import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.config import get_settings, validate_runtime_config
from storefront.core.errors import AuthenticationError, StorefrontError
from storefront.database import Base, engine, ensure_reference_roles
from storefront.models import product, role, user  # noqa: F401
from storefront.routes import auth_routes, product_routes, user_routes

settings = get_settings()
validate_runtime_config(settings)

app = FastAPI(title='Storefront API', debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.exception_handler(StorefrontError)
async def handle_storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
    headers = {'WWW-Authenticate': 'Bearer'} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.on_event('startup')
def initialize_database() -> None:
    try:
        Base.metadata.create_all(bind=engine)
        ensure_reference_roles()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'Storefront API Running'}


app.include_router(auth_routes.router, prefix='/auth')
app.include_router(user_routes.router, prefix='/users')
app.include_router(product_routes.router, prefix='/products')
