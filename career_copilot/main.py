import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import sentry_sdk

from career_copilot.ai.errors import GenerationError, UnknownProviderError
from career_copilot.ai.factory import ProviderRouter
from career_copilot.api.v1.career_paths import router as career_paths_router
from career_copilot.api.v1.health import router as health_router
from career_copilot.api.v1.resume import router as resume_router
from career_copilot.api.v1.roadmap import router as roadmap_router
from career_copilot.api.v1.skill_gap import router as skill_gap_router
from career_copilot.api.v1.upload import router as upload_router
from career_copilot.core.config import settings
from career_copilot.core.cors import cors_allowed_origins
from career_copilot.core.lifespan import lifespan
from career_copilot.core.rate_limit import GenerationRateLimitExceeded, limiter
from career_copilot.schemas.requests import ApiErrorResponse
from career_copilot.services.response_cache import ResponseCache

load_dotenv()
logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

logger = logging.getLogger(__name__)

app = FastAPI(title="Career Copilot API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.state.response_cache = ResponseCache(enabled=settings.cache_enabled)
app.state.provider_router = ProviderRouter()


def _error(status_code: int, message: str, code: str | None = None) -> JSONResponse:
    body = ApiErrorResponse(error=message, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return _error(400, "Invalid request")
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(location) or "body"
    return _error(400, f"Invalid request: {field}: {first.get('msg', 'invalid value')}")


@app.exception_handler(UnknownProviderError)
async def unknown_provider_handler(request: Request, exc: UnknownProviderError):
    return _error(400, str(exc))


@app.exception_handler(GenerationRateLimitExceeded)
async def rate_limit_handler(request: Request, exc: GenerationRateLimitExceeded):
    return _error(429, str(exc), code="rate_limited")


@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError):
    logger.error("generation_error path=%s code=%s: %s", request.url.path, exc.code, exc)
    return _error(500, str(exc), code=exc.code)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(resume_router, prefix="/v1", tags=["Resume"])
app.include_router(career_paths_router, prefix="/v1", tags=["Career Paths"])
app.include_router(skill_gap_router, prefix="/v1", tags=["Skill Gap"])
app.include_router(roadmap_router, prefix="/v1", tags=["Roadmap"])
app.include_router(upload_router, prefix="/v1", tags=["Upload"])
