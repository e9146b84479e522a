# main.py - MediTranslate speech translation service
# The browser is a thin client; recognition, synthesis and clipboard run there
# and are driven over the conversation WebSocket.

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from datetime import datetime

from core.config import settings
from core.logging_config import configure_logging
from routers.conversation_router import router as conversation_router

# Configure logging
configure_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Live speech to sanitized, medically-enhanced, translated text",
    version=settings.app_version
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

app.include_router(conversation_router)

# =============================================================================
# CORE API ENDPOINTS
# =============================================================================

@app.get("/")
async def root():
    return {
        "message": settings.app_name,
        "version": settings.app_version,
        "features": [
            "Continuous speech capture with final-result commits",
            "Input sanitization at every trust boundary",
            "Clinical terminology enhancement",
            "Remote translation with offline fallback",
            "Automatic purge of patient data after inactivity"
        ],
        "endpoints": {
            "conversation": ["/conversation/ws", "/conversation/languages"],
            "health": ["/health"]
        }
    }

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "environment": settings.environment,
        "translation_endpoint": settings.translation_api_url,
        "inactivity_timeout_seconds": settings.inactivity_timeout_seconds
    }

# =============================================================================
# STARTUP EVENTS
# =============================================================================

@app.on_event("startup")
async def startup_event():
    logger.info(f"🚀 {settings.app_name} {settings.app_version} starting up...")
    logger.info(f"🌐 Translation endpoint: {settings.translation_api_url}")
    logger.info(f"🔒 Inactivity purge after {settings.inactivity_timeout_seconds:.0f}s")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.reload)
