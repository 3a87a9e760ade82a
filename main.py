from fastapi import Depends, FastAPI, Header, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
from config import settings
from dependencies import (
    get_database,
    get_language_detector,
    get_portfolio_agent,
    get_rate_limiter,
    get_translator,
)
from agents.portfolio_agent import PortfolioAgent
from models.chat import AskRequest, TranslateRequest
from routes.content import router as content_router
from services.database import DatabaseService
from services.language_detector import LanguageDetector
from services.session_manager import SORT_ORDERS, group_sessions
from services.translator import SUPPORTED_LANGUAGES, Translator
from utils.errors import (
    ConfigurationError,
    NotFoundError,
    RateLimitError,
    UpstreamError,
    ValidationError,
)
import logging
import threading

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

RATE_LIMIT_PURGE_INTERVAL_SECONDS = 300

app = FastAPI(
    title="Portfolio Agent",
    version="0.1.0",
    description="Conversational agent answering visitor questions about a personal portfolio"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_purge_stop = threading.Event()


# Error mapping

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc), "details": exc.details})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(RateLimitError)
async def rate_limit_handler(request: Request, exc: RateLimitError):
    return JSONResponse(
        status_code=429,
        content={
            "error": "AI usage limit exceeded",
            "message": str(exc),
            "remaining": exc.remaining,
            "resetTime": exc.reset_at,
        },
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Service is not configured correctly"})


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    logger.error(f"Upstream error on {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"error": "Upstream service unavailable"})


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "service": "Portfolio Agent"
    }


@app.post("/api/ask")
def ask(
    body: AskRequest,
    request: Request,
    accept_language: Optional[str] = Header(None),
    agent: PortfolioAgent = Depends(get_portfolio_agent),
    detector: LanguageDetector = Depends(get_language_detector),
):
    """Answer a visitor question

    Args:
        body: Question plus optional sessionId, promptExampleId, sessionHistory, language
        accept_language: Used to pick a reply language when the body names none

    Returns:
        Answer payload; showcase answers carry structured records instead of text
    """
    if not body.language and accept_language:
        body.language = detector.from_locale(accept_language)

    response = agent.ask(body, client_key=_client_ip(request))
    return response.model_dump(by_alias=True, mode="json", exclude_none=True)


# Conversation review

@app.get("/api/conversations")
def get_conversations(
    limit: Optional[int] = None,
    db: DatabaseService = Depends(get_database),
):
    """Flat turn list, newest first

    Args:
        limit: Only return the N most recent turns
    """
    if limit is not None and limit < 1:
        raise ValidationError("limit must be a positive integer")

    turns = db.get_recent_conversations(limit) if limit else db.get_all_conversations()
    return {
        "success": True,
        "conversations": [t.model_dump(by_alias=True, mode="json") for t in turns],
    }


@app.get("/api/conversations/sessions")
def get_conversation_sessions(
    order: str = "desc",
    hide_showcases: bool = False,
    db: DatabaseService = Depends(get_database),
):
    """Turns grouped into sessions for the review screen

    Args:
        order: 'asc' or 'desc' by session start
        hide_showcases: Drop showcase turns (and sessions left empty)
    """
    if order not in SORT_ORDERS:
        raise ValidationError(f"order must be one of {', '.join(SORT_ORDERS)}")

    groups = group_sessions(db.get_all_conversations(), order=order, hide_showcases=hide_showcases)
    return {
        "success": True,
        "sessions": [g.model_dump(by_alias=True, mode="json") for g in groups],
    }


# Language

@app.post("/api/translate")
def translate(
    body: TranslateRequest,
    translator: Translator = Depends(get_translator),
):
    """Translate arbitrary UI text into one of the supported languages"""
    if body.target_language not in SUPPORTED_LANGUAGES:
        raise ValidationError(
            "Unsupported target language",
            details=[f"Supported: {', '.join(SUPPORTED_LANGUAGES)}"],
        )

    translated = translator.translate_text(body.text, body.target_language, body.context)
    return {"success": True, "translatedText": translated, "targetLanguage": body.target_language}


@app.get("/api/language")
def detect_language(
    request: Request,
    detector: LanguageDetector = Depends(get_language_detector),
):
    """Preferred language for the caller, from IP geolocation"""
    ip = _client_ip(request)
    language = detector.detect_preferred_language(ip)
    return {"success": True, "language": language, "ip": ip}


# Content endpoints are declared after the fixed routes above so that
# /api/conversations and friends are not captured by /api/{entity}
app.include_router(content_router, prefix="/api", tags=["content"])


@app.on_event("startup")
async def startup_event():
    """Build services eagerly and start expiring rate-limit windows"""
    logger.info("Starting Portfolio Agent")

    # Fails fast on bad credentials or an unreachable client configuration
    get_portfolio_agent()

    rate_limiter = get_rate_limiter()

    def purge_rate_limits():
        while not _purge_stop.wait(RATE_LIMIT_PURGE_INTERVAL_SECONDS):
            rate_limiter.purge_expired()

    thread = threading.Thread(target=purge_rate_limits, daemon=True)
    thread.start()
    logger.info("Rate limit purge thread started")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on server shutdown"""
    _purge_stop.set()
    logger.info("Shutting down Portfolio Agent")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
