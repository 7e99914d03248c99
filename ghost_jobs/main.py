import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ghost_jobs.api import api_router
from ghost_jobs.config import settings
from ghost_jobs.services.intake import AnalysisError


LOGGER = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="Ghost Job Checker",
        version="0.1.0",
        debug=settings.debug,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    def health_check() -> dict[str, str]:
        return {"status": "ok"}

    @app.exception_handler(AnalysisError)
    async def _analysis_error(request: Request, exc: AnalysisError) -> JSONResponse:
        LOGGER.info("Rejected analysis request: %s", exc)
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def _request_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request. Send JSON with a \"url\" or \"jobDescription\" string."},
        )

    app.include_router(api_router)
    return app


app = create_app()


def run() -> None:
    uvicorn.run("ghost_jobs.main:app", host=settings.host, port=settings.port)
