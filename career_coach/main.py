from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from career_coach.config import get_settings
from career_coach.database import close_db, init_db
from career_coach.middleware.correlation import CorrelationIdFilter, CorrelationMiddleware
from career_coach.middleware.rate_limit import limiter
from career_coach.routes import insights, resume, cover_letters, interview_prep, career_path, onboarding
from career_coach.services.errors import ProviderUnavailableError, ResponseParseError
from career_coach.utils.logger import logger
from career_coach.utils.metrics import get_snapshot

settings = get_settings()
logger.addFilter(CorrelationIdFilter())

app = FastAPI(title=settings.app_name, version=settings.app_version)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS - Explicit origins for security
allowed_origins = [origin.strip() for origin in settings.allowed_origins.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Correlation-ID"],
)
app.add_middleware(CorrelationMiddleware)


# Generation failures never return partial artifacts
@app.exception_handler(ProviderUnavailableError)
async def provider_unavailable_handler(request: Request, exc: ProviderUnavailableError):
    logger.error(f"Generation failed on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": f"Failed to generate content: {exc}", "error": "generation_failed"},
    )


@app.exception_handler(ResponseParseError)
async def response_parse_handler(request: Request, exc: ResponseParseError):
    logger.error(f"Unusable model output on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={"detail": f"Failed to generate content: {exc}", "error": "invalid_model_output"},
    )


@app.exception_handler(SQLAlchemyError)
async def persistence_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.url.path}: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Database unavailable", "error": "persistence_error"},
    )


# Startup: Initialize database
@app.on_event("startup")
async def startup_event():
    logger.info("Starting Career Coach API...")
    await init_db()
    logger.info(f"Backend ready at http://{settings.backend_host}:{settings.backend_port}")


@app.on_event("shutdown")
async def shutdown_event():
    await close_db()

# Health check endpoint (minimal response to prevent information disclosure)
@app.get("/health")
async def health_check():
    return {"status": "ok"}

@app.get("/metrics")
async def metrics():
    return get_snapshot()

# Register routes
app.include_router(onboarding.router, prefix="/api/onboarding", tags=["Onboarding"])
app.include_router(insights.router, prefix="/api/insights", tags=["Industry Insights"])
app.include_router(resume.router, prefix="/api/resume", tags=["Resume"])
app.include_router(cover_letters.router, prefix="/api/cover-letter", tags=["Cover Letters"])
app.include_router(interview_prep.router, prefix="/api", tags=["Interview Prep"])
app.include_router(career_path.router, prefix="/api/career-path", tags=["Career Path"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "career_coach.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.debug
    )
