"""FastAPI application entry point."""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from voice_relay.dependencies import get_config
from voice_relay.error_handlers import register_error_handlers
from voice_relay.logging import setup_logging
from voice_relay.routes import health_router, transcribe_router

logger = setup_logging(__name__)

_config = get_config()

if _config.server.tracing_enabled:
    from ddtrace import patch_all

    patch_all()

app = FastAPI(title="Voice Relay Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_config.server.cors_origins),
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
register_error_handlers(app)
app.include_router(health_router)
app.include_router(transcribe_router)


def run():
    """Starts the service with uvicorn."""
    logger.info("Starting voice-relay service")
    uvicorn.run(app, host=_config.server.host, port=_config.server.port)
