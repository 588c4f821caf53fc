"""
FastAPI application exposing the generation pipeline over HTTP.
"""

from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from promptpage import __version__
from promptpage.config import Settings
from promptpage.errors import BackendUnavailable, StageError, ValidationError
from promptpage.models import (
    ErrorResponse,
    HealthResponse,
    PipelineResponse,
    ProcessRequest,
    UnavailableResponse,
    ValidateCodeRequest,
    ValidationResponse,
)
from promptpage.pipeline.orchestrator import RequestOrchestrator
from promptpage.utils.llm_logger import get_logger


TROUBLESHOOTING = "Check Ollama service and model availability"


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache()
def get_orchestrator() -> RequestOrchestrator:
    return RequestOrchestrator.from_settings(get_settings())


def unavailable_solution(model: str) -> str:
    return f"1. Ensure Ollama is running\n2. Run: ollama pull {model}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Shutdown: release the backend connection pool if one was opened
    if get_orchestrator.cache_info().currsize:
        get_orchestrator().close()
        get_orchestrator.cache_clear()


app = FastAPI(title="PromptPage API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------

@app.exception_handler(ValidationError)
async def requirement_error_handler(request: Request, exc: ValidationError):
    body = ErrorResponse(error=exc.message, troubleshooting="Please enter a description")
    return JSONResponse(status_code=400, content=body.model_dump())


@app.exception_handler(BackendUnavailable)
async def backend_unavailable_handler(request: Request, exc: BackendUnavailable):
    body = UnavailableResponse(error=exc.message, solution=unavailable_solution(get_settings().model))
    return JSONResponse(status_code=503, content=body.model_dump())


@app.exception_handler(StageError)
async def stage_error_handler(request: Request, exc: StageError):
    get_logger().log_event("API", f"Request failed: {exc.message}")
    body = ErrorResponse(error=exc.message, troubleshooting=TROUBLESHOOTING)
    return JSONResponse(status_code=500, content=body.model_dump())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    print(f"Request Failed: {type(exc).__name__}: {exc}")
    body = ErrorResponse(error=str(exc) or type(exc).__name__, troubleshooting=TROUBLESHOOTING)
    return JSONResponse(status_code=500, content=body.model_dump())


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.get(
    "/api/health",
    response_model=HealthResponse,
    responses={503: {"model": UnavailableResponse}},
)
def health(orchestrator: RequestOrchestrator = Depends(get_orchestrator)):
    """Probe the inference backend."""
    if not orchestrator.check_available():
        raise BackendUnavailable()
    return HealthResponse(status="Ollama service is healthy", version=__version__, theme="light")


@app.post(
    "/api/process-request",
    response_model=PipelineResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": UnavailableResponse},
    },
)
def process_request(
    request: ProcessRequest,
    orchestrator: RequestOrchestrator = Depends(get_orchestrator),
):
    """Run analysis, code generation and validation for one requirement."""
    return orchestrator.handle(request.requirement)


@app.post(
    "/api/validate-code",
    response_model=ValidationResponse,
    responses={
        500: {"model": ErrorResponse},
        503: {"model": UnavailableResponse},
    },
)
def validate_code(
    request: ValidateCodeRequest,
    orchestrator: RequestOrchestrator = Depends(get_orchestrator),
):
    """Re-validate user-edited code without regenerating it."""
    validation = orchestrator.validate_only(request.html, request.css, request.js)
    return ValidationResponse(validation=validation)
