"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"status": "error", "message": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ruleset_validator.domain.exceptions import (
    GitCommandError,
    InvalidBranchError,
    InvalidModuleFileError,
    InvalidRepositoryNameError,
    MissingFilesError,
    RepositoryStateError,
    RulesetValidatorError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: list[tuple[type[RulesetValidatorError], int]] = [
    (InvalidRepositoryNameError, 422),
    (InvalidBranchError, 422),
    (MissingFilesError, 422),
    (InvalidModuleFileError, 422),
    (GitCommandError, 502),
    (RepositoryStateError, 500),
]


def _error_json(
    status_code: int, message: str, missing_files: list[str] | None = None
) -> JSONResponse:
    content: dict[str, object] = {"status": "error", "message": message}
    if missing_files is not None:
        content["missing_files"] = missing_files
    return JSONResponse(status_code=status_code, content=content)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    for exc_type, code in _EXCEPTION_STATUS:

        def _make_handler(
            status_code: int,
        ):  # type: ignore[no-untyped-def]
            async def handler(request: Request, exc: Exception) -> JSONResponse:
                logger.warning("%s: %s", type(exc).__name__, exc)
                return _error_json(
                    status_code,
                    str(exc),
                    getattr(exc, "missing_files", None),
                )

            return handler

        app.add_exception_handler(exc_type, _make_handler(code))

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
