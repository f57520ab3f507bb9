"""FastAPI REST API for running forcesuper checks."""

from dataclasses import replace
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from . import __version__
from .config import CheckerConfig
from .errors import (
    ConfigError,
    CyclicAncestorError,
    DuplicateClassError,
    ForceSuperError,
    InconsistentRenewStateError,
    MissingSuperCallError,
    UnsupportedLanguageError,
)
from .project import check_sources
from .semantic import supported_languages


# --- Pydantic Schemas ---


class SourceFileSchema(BaseModel):
    path: str = Field(..., min_length=1)
    source: str


class CheckRequest(BaseModel):
    """One build pass over the submitted files, visited in the given order."""

    files: list[SourceFileSchema]
    required_tag: Optional[str] = None
    debug: bool = False


class CheckResponse(BaseModel):
    status: str
    files: int
    classes: int
    parse_errors: list[str]


# --- FastAPI App ---


app = FastAPI(
    title="forcesuper API",
    description="Checks that overrides of tagged methods call super",
    version=__version__,
)


# --- Global Exception Handler ---


# Map exception types to HTTP status codes
ERROR_STATUS_CODES: dict[type, int] = {
    MissingSuperCallError: 422,
    CyclicAncestorError: 422,
    InconsistentRenewStateError: 409,
    DuplicateClassError: 400,
    UnsupportedLanguageError: 400,
    ConfigError: 400,
}


@app.exception_handler(ForceSuperError)
async def forcesuper_error_handler(request: Request, exc: ForceSuperError) -> JSONResponse:
    """Map ForceSuperError subclasses to appropriate HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    content = {"detail": str(exc), "error_type": type(exc).__name__}
    if isinstance(exc, MissingSuperCallError):
        content.update(
            method=exc.method_name,
            class_name=exc.class_name,
            path=exc.path,
            line=exc.line,
        )
    elif isinstance(exc, InconsistentRenewStateError):
        content["pending"] = {str(identity): reason for identity, reason in exc.stalled.items()}
    return JSONResponse(status_code=status_code, content=content)


# --- Endpoints ---


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": __version__,
        "languages": supported_languages(),
    }


@app.post("/api/check", response_model=CheckResponse)
def check(request: CheckRequest):
    """
    Run one build pass over the submitted sources.

    Violations are reported through the error handler (422 for a missing
    super call or cyclic inheritance, 409 for classes left unresolved).
    """
    config = CheckerConfig(debug=request.debug)
    if request.required_tag:
        tag = request.required_tag.strip().lstrip("@")
        if not tag:
            raise ConfigError("request", "'required_tag' must be a non-empty string")
        config = replace(config, required_tag=tag)

    report = check_sources([(f.path, f.source) for f in request.files], config)
    return CheckResponse(status="ok", **report.to_dict())
