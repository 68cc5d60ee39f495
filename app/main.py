# app/main.py
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.config.settings import settings
from app.config.database import Base, engine
from app.core.middleware import setup_middleware
from app.api.v1.router import api_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("🚀 StockFlow API Starting...")
    logger.info(f"📍 Version: {settings.version}")
    logger.info(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")
    logger.info(f"🔐 JWT Algorithm: {settings.algorithm}")
    logger.info(f"🗄️  Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else settings.database_url}")

    if settings.create_tables_on_startup:
        Base.metadata.create_all(bind=engine)
        logger.info("✅ Tablas verificadas")

    yield

    # Shutdown
    logger.info("🛑 StockFlow API Shutting down...")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Ciclo de vida de pedidos y recibos de inventario: estados, eliminación lógica y operaciones masivas",
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)

# Include routers
app.include_router(api_router, prefix="/api/v1")

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "🚀 StockFlow API",
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
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
