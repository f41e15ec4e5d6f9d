import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import StatementError
from starlette import status
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import HTMLResponse

from app.api.router import api_router
from app.config import settings
from app.core.middlewares.process_time_middleware import ProcessingTimeMiddleware
from app.core.utils.webhook import notify_error
from app.response import CustomHTTPException, ErrorResponse

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

application = FastAPI(
    title="Event Management API",
    version=settings.APP_VERSION,
    default_response_class=ORJSONResponse,
)

application.include_router(router=api_router)
application.mount(
    "/uploads",
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)
application.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
application.add_middleware(ProcessingTimeMiddleware)


@application.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    track_id = str(uuid.uuid4())
    logger.exception(
        "Unhandled error %s on %s %s", track_id, request.method, request.url.path
    )
    await notify_error(request, exc, track_id)
    return ErrorResponse(
        message="Internal Server Error",
        errors={"error": "An error occurred while processing the request"},
        track_id=track_id,
    ).get_response(status.HTTP_500_INTERNAL_SERVER_ERROR)


@application.exception_handler(StatementError)
async def statement_error_handler(request: Request, exc: StatementError):
    if isinstance(exc.orig, CustomHTTPException):
        return exc.orig.get_response()
    return await unhandled_exception_handler(request, exc)


@application.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = {}

    for error in exc.errors():
        current = errors

        if len(error["loc"]) <= 1:
            current[error["loc"][0]] = error["msg"]
            continue

        keys = error["loc"][1:]
        for loc in keys[:-1]:
            current = current.setdefault(loc, {})
        current[keys[-1]] = error["msg"]

    return ErrorResponse(
        message="Invalid request",
        error_code="VALIDATION_ERROR",
        errors=errors,
    ).get_response(status.HTTP_400_BAD_REQUEST)


@application.exception_handler(CustomHTTPException)
async def custom_http_exception_handler(request: Request, exc: CustomHTTPException):
    return exc.get_response()


@application.head("/ping")
async def ping():
    return HTMLResponse(content=None, status_code=status.HTTP_204_NO_CONTENT)
