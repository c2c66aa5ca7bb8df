from voice_relay.routes.health import router as health_router
from voice_relay.routes.transcribe import router as transcribe_router

__all__ = ["health_router", "transcribe_router"]
