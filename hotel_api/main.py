import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hotel_api.api.hotels.router import router as hotels_router
from hotel_api.api.rooms.router import router as rooms_router, hotel_rooms_router
from hotel_api.api.reviews.router import router as reviews_router, hotel_reviews_router
from hotel_api.database.db import Database
from hotel_api.utils.errors import ErrorResponse
from hotel_api.utils.geocoder import Geocoder
from config import Config

logger = logging.getLogger(__name__)


def error_content(message: str, errors=None) -> dict:
    content = {"success": False, "error": message}
    if errors:
        content["errors"] = errors
    return content


def first_error_message(errors) -> str:
    if not errors:
        return "Invalid input"
    first_error = errors[0]
    loc = ".".join(str(loc_part) for loc_part in first_error.get("loc", []) if loc_part != "body")
    msg = first_error.get("msg", "Invalid input")
    return f"{loc}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI):

    @app.exception_handler(ErrorResponse)
    async def error_response_handler(request: Request, exc: ErrorResponse):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_content(exc.message, exc.errors))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content=error_content(message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation Error: %s", exc.errors())
        return JSONResponse(status_code=400, content=error_content(first_error_message(exc.errors())))

    @app.exception_handler(ValidationError)
    async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
        logger.warning("Pydantic Validation Error: %s", exc.errors())
        return JSONResponse(status_code=400, content=error_content(first_error_message(exc.errors())))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_content("Server Error"))


def create_app(config=Config, geocoder: Geocoder = None) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Hotel Listings API",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Load configurations from custom class
    app.state.config = config
    app.state.database = Database(config.DATABASE_URL)
    app.state.geocoder = geocoder or Geocoder(
        provider=config.GEOCODER_PROVIDER,
        api_key=config.GEOCODER_API_KEY,
        timeout=config.GEOCODER_TIMEOUT,
    )

    # CORS setup
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Uploaded photos are served from /uploads
    os.makedirs(config.FILE_UPLOAD_PATH, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=config.FILE_UPLOAD_PATH), name="uploads")

    # Register routers; nested hotel routes before the plain resource routes
    prefix = config.API_PREFIX
    app.include_router(hotel_rooms_router, prefix=prefix)
    app.include_router(hotel_reviews_router, prefix=prefix)
    app.include_router(hotels_router, prefix=prefix)
    app.include_router(rooms_router, prefix=prefix)
    app.include_router(reviews_router, prefix=prefix)

    register_exception_handlers(app)

    @app.on_event("startup")
    def startup():
        app.state.database.open()

    @app.on_event("shutdown")
    def shutdown():
        app.state.database.close()

    # check health
    @app.get("/check-api-status")
    async def check_api_status():
        return JSONResponse(status_code=200, content={"message": "API is running", "status": "ok"})

    return app


app = create_app()
