# expense_ledger/main.py
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from expense_ledger.config.settings import settings
from expense_ledger.config.database import init_db
from expense_ledger.core.middleware import setup_middleware
from expense_ledger.core.errors import setup_exception_handlers
from expense_ledger.api.v1.router import api_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"{settings.app_name} starting")
    logger.info(f"Version: {settings.version}")
    logger.info(f"Environment: {'development' if settings.debug else 'production'}")
    logger.info(f"Database: {settings.database_host or 'local'}")
    logger.info(f"Email notifications: {'SMTP ' + settings.smtp_server if settings.smtp_configured else 'not configured'}")

    if settings.create_tables_on_startup:
        init_db()

    yield

    # Shutdown
    logger.info(f"{settings.app_name} shutting down")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Event expense ledger: expenses, budgets and spend summaries",
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware and error envelopes
setup_middleware(app)
setup_exception_handlers(app)

# Include routers
app.include_router(api_router, prefix="/api/v1")

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": f"{settings.app_name}",
        "version": settings.version,
        "status": "running",
        "environment": "production" if not settings.debug else "development",
        "docs": "/docs",
        "api": "/api/v1"
    }

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.version,
        "app": settings.app_name,
        "environment": "production" if not settings.debug else "development"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "expense_ledger.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
