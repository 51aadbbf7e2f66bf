"""
Placement ATS - Main Application

FastAPI preview surface over the extraction and scoring engine:
- Resume / JD parsing from uploads or text
- Candidate-job eligibility and match scoring
- Resume quality suggestions

Run: uvicorn placement_ats.main:app --reload
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from placement_ats import __version__
from placement_ats.api import api_router
from placement_ats.core.config import get_settings
from placement_ats.core.exceptions import PlacementATSError, map_to_http_exception
from placement_ats.core.logging_config import configure_for_environment, get_logger

settings = get_settings()
configure_for_environment(settings.environment, settings.log_level)
logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Placement ATS",
    description="""
    Rule-based resume and job description mining for campus placement.

    ## Features
    - **Parsing**: Contact, name, skills, CGPA, branch and admission year from resumes
    - **Job descriptions**: Skills, CGPA cutoff, backlog limit, branches and package
    - **Matching**: Hard eligibility gates plus a weighted match score
    - **Suggestions**: What to fix so the resume reads well in an ATS
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(PlacementATSError)
async def placement_ats_error_handler(request: Request, exc: PlacementATSError):
    """Render engine errors with the status code their type maps to."""
    http_exc = map_to_http_exception(exc)
    logger.warning(f"{request.method} {request.url.path} -> {http_exc.status_code}: {exc.message}")
    return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check."""
    return {
        "status": "healthy",
        "app": "Placement ATS",
        "version": __version__,
        "environment": settings.environment
    }
