"""
ShotCoach Backend API

FastAPI application for basketball shot analysis from streamed pose landmarks.

Run with:
    uvicorn main:app --reload --host 0.0.0.0 --port 8000

API docs available at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router as api_router, API_VERSION
from api.settings import settings
from api.websocket import websocket_endpoint

# =============================================================================
# Logging Configuration
# =============================================================================

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG_MODE else settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan (startup/shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup code before app starts accepting requests,
    and cleanup code when app shuts down.
    """
    # Startup
    logger.info(f" ShotCoach API starting up ({settings.ENV})...")
    logger.info(f" API docs: http://localhost:{settings.PORT}/docs")
    logger.info(f" WebSocket: ws://localhost:{settings.PORT}/ws/live")
    logger.info(
        f" Cue locale: {settings.CUE_LOCALE}, cooldown: {settings.CUE_COOLDOWN_MS}ms, "
        f"smoothing alpha: {settings.SMOOTHING_ALPHA}"
    )

    yield  # App runs here

    # Shutdown
    logger.info(" ShotCoach API shutting down...")


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title="ShotCoach API",
    description="""
    **Real-Time Basketball Shot Coach**

    Biomechanics analysis of jump shots from 33-point pose landmarks.

    ## Features

    - **Live Tracking** via WebSocket (phases, shots, jump height, airtime)
    - **Posture Cues** ranked by severity, throttled for voice playback
    - **Scoring** (form, stability, consistency, follow-through, explosivity)

    ## Endpoints

    - `GET /api/health` - Health check
    - `POST /api/pose/analyze` - Single pose analysis
    - `POST /api/session/analyze` - Recorded sequence analysis
    - `WS /ws/live` - Live landmark stream

    ## WebSocket Protocol

    Connect to `/ws/live` and send landmarks as JSON:
```json
    {
        "type": "frame",
        "data": {"landmarks": [...], "frame_number": 0},
        "timestamp": 1704067200000
    }
```
    """,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# CORS Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Routes
# =============================================================================

# Include REST API routes
app.include_router(api_router, prefix="/api")

# WebSocket endpoint
app.websocket("/ws/live")(websocket_endpoint)


# =============================================================================
# Root endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "name": "ShotCoach API",
        "version": API_VERSION,
        "description": "Real-Time Basketball Shot Coach",
        "docs": "/docs",
        "health": "/api/health",
        "websocket": "/ws/live"
    }


# =============================================================================
# Run directly (for development)
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG_MODE,
        log_level=settings.LOG_LEVEL.lower()
    )
