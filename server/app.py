import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from db.store import RecordStore
from errors import MeetingNotesError
from processing.summarizer import SummaryService
from server.routes import create_debug_router, create_router
from sharing.mailer import Mailer, ShareDispatcher

logger = logging.getLogger(__name__)


def create_app(store: RecordStore, summarizer: SummaryService, mailer: Mailer,
               debug: bool = False) -> FastAPI:
    app = FastAPI(title="Meeting Notes Summarizer", version="0.1.0")

    dispatcher = ShareDispatcher(store, mailer)
    app.include_router(create_router(store, summarizer, dispatcher), prefix="/api")
    if debug:
        app.include_router(create_debug_router(store), prefix="/api")

    @app.exception_handler(MeetingNotesError)
    async def handle_app_error(request: Request, exc: MeetingNotesError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_bad_request(request: Request, exc: RequestValidationError):
        return JSONResponse(
            {"error": "validation_error", "message": "Malformed request body"},
            status_code=400,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            {"error": "internal_error", "message": "Internal server error"},
            status_code=500,
        )

    return app
