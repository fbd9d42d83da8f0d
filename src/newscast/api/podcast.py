import logging

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from newscast.errors import (
    AuthenticationError,
    ConfigError,
    MissingCredentialsError,
    NewscastError,
    RateLimitError,
    TTSError,
)
from newscast.models import GenerateEpisodeRequest, Topic
from newscast.services.episode_generator import EpisodeGenerator, build_episode_generator
from newscast.topics import TOPICS

from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Podcast"])

GENERATE_PATH = f"{router.prefix}/generate-podcast"

_generator: EpisodeGenerator | None = None


def get_episode_generator(settings: Settings = Depends(get_settings)) -> EpisodeGenerator:
    """Return the process-wide episode generator, building it on first use."""
    global _generator
    if _generator is None:
        _generator = build_episode_generator(settings)
    return _generator


@router.get("/topics")
async def list_topics() -> list[Topic]:
    """Return the topic catalog."""
    return TOPICS


@router.post("/generate-podcast")
async def generate_podcast(
    request: GenerateEpisodeRequest,
    settings: Settings = Depends(get_settings),
    generator: EpisodeGenerator = Depends(get_episode_generator),
):
    """Generate an episode for the selected topics."""
    if not request.topics:
        raise ConfigError("At least one topic is required")
    if len(request.topics) > settings.max_topics:
        raise ConfigError(f"Maximum {settings.max_topics} topics allowed")
    artifact = await generator.generate_episode(request.topics)
    return artifact.to_response()


GENERIC_ERROR = "Failed to generate podcast. Please try again."
RATE_LIMIT_ERROR = "Too many requests. Please try again later."


def error_response(exc: NewscastError) -> tuple[int, str]:
    """Status code and user-facing message for *exc*; detail is logged only.

    Speech provider failures carry the provider's HTTP status and are reported
    like script generation failures with the same status.
    """
    status = exc.status if isinstance(exc, TTSError) else None
    if isinstance(exc, MissingCredentialsError):
        return 500, f"{exc.service} API key not configured"
    if isinstance(exc, ConfigError):
        return 400, str(exc)
    if isinstance(exc, AuthenticationError) or status in (401, 403):
        return 401, f"Invalid {exc.service} API key"
    if isinstance(exc, RateLimitError) or status == 429:
        return 429, RATE_LIMIT_ERROR
    return 500, GENERIC_ERROR


async def handle_newscast_error(request: Request, exc: NewscastError) -> JSONResponse:
    status_code, message = error_response(exc)
    if status_code >= 500:
        logger.error(f"Podcast generation error: {type(exc).__name__}: {exc}", exc_info=exc)
    else:
        logger.info(f"Rejected request to {request.url.path}: {exc}")
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # A body without a topic list is reported like an empty one
    if request.url.path == GENERATE_PATH:
        logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "At least one topic is required"})
    return await request_validation_exception_handler(request, exc)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Podcast generation error: {type(exc).__name__}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NewscastError, handle_newscast_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
