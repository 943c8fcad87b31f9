"""
FastAPI application - e-commerce API entry point
"""
from ecommerce_api.application import create_app
from ecommerce_api.config import get_settings
from ecommerce_api.core.logging import setup_logging, get_logger

# Logging is configured on import
settings = get_settings()
setup_logging(log_level=settings.LOG_LEVEL, is_debug=settings.DEBUG)
logger = get_logger(__name__)

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    logger.info(
        "Starting server",
        host=settings.HOST,
        port=settings.PORT
    )

    uvicorn.run(
        "ecommerce_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
