"""
Credit Report Analyzer - FastAPI Application

Main entry point for the backend.

Architecture:
- XML upload → Document Parser → RawDocumentTree
- RawDocumentTree → Field Locator → Identity
- Accounts → Code Translator & Aggregator → Summary + Tradelines
- Record Assembler → CreditReport → CreditReportStore
"""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .routers import reports_router
from .database import init_db

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.getLogger("report_analyzer").setLevel(LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    init_db()
    yield

# Create FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title="Credit Report Analyzer",
    description="""
    Credit Report Analyzer - Experian XML ingestion

    Parses bureau XML reports into a normalized credit record and serves it
    back through simple query endpoints.

    ## Pipeline
    1. **Document Parser**: XML → generic tree
    2. **Field Locator**: fallback chains → identity
    3. **Code Translator & Aggregator**: bureau codes → labels, summary figures
    4. **Record Assembler**: masking, date formatting → CreditReport
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=CORS_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(reports_router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    """Return errors in the same envelope as successful responses."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Credit Report Analyzer",
        "version": "1.0.0",
        "description": "Experian XML credit report ingestion",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


# For running with: python -m report_analyzer.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "4000")))
