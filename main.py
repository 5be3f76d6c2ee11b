# main.py
import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, load_settings
from errors import ConfigurationError
from evaluator import ResumeEvaluator
from model_client import GeminiModelClient, ModelClient
from result_log import ResultLog
from routes.score_routes import INTERNAL_ERROR_MESSAGE, INVALID_REQUEST_MESSAGE, NO_FILE_MESSAGE
from routes.score_routes import router as score_router

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # A "resume" form field that is text instead of a file counts as no upload
    if any(tuple(err.get("loc", ()))[:2] == ("body", "resume") for err in exc.errors()):
        message = NO_FILE_MESSAGE
    else:
        message = INVALID_REQUEST_MESSAGE
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": message})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"🔥 Server error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


def create_app(settings: Optional[Settings] = None, client: Optional[ModelClient] = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title="Resume Scorer API",
        description="Upload a resume and get back a rubric-based score from a language model",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    client = client or GeminiModelClient(api_key=settings.api_key, model_name=settings.model_name)
    app.state.settings = settings
    app.state.evaluator = ResumeEvaluator(
        client,
        schema_variant=settings.schema_variant,
        timeout_seconds=settings.model_timeout_seconds,
        max_concurrent_calls=settings.max_concurrent_model_calls,
    )
    app.state.result_log = ResultLog(settings.result_log_path) if settings.result_log_path else None

    app.include_router(score_router)

    @app.get("/")
    def root():
        return {"message": "Resume scoring backend running", "schema_variant": settings.schema_variant.value}

    logger.info(
        f"Scoring with {settings.model_name} using the '{settings.schema_variant.value}' schema, "
        f"timeout {settings.model_timeout_ms}ms, {settings.max_concurrent_model_calls} concurrent model calls"
    )
    return app


def run() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    app = create_app(settings)
    logger.info(f"🚀 Resume scoring API is live at http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
