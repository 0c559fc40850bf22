import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from profile_app.core import config
from profile_app.core.errors import ProfileAppError
from profile_app.database import engine, ensure_users_schema
from profile_app.models import user
from profile_app.routes import auth_routes, user_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title='Profile API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        user.Base.metadata.create_all(bind=engine)
        ensure_users_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.exception_handler(ProfileAppError)
def handle_profile_app_error(request: Request, exc: ProfileAppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={'message': exc.message},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0]['msg'] if errors else 'Invalid request body.'
    return JSONResponse(status_code=400, content={'message': message})


@app.exception_handler(StarletteHTTPException)
def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = 'This route does not exist' if exc.status_code == 404 else exc.detail
    return JSONResponse(status_code=exc.status_code, content={'message': message}, headers=exc.headers)


@app.exception_handler(Exception)
def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={'message': 'Internal server error. Check the server console'},
    )


@app.get('/')
def root():
    return {'status': 'Profile API running'}


app.include_router(auth_routes.router, prefix='/auth')
app.include_router(user_routes.router, prefix='/users')
