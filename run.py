"""
Script to start the e-commerce API
"""
import sys
from pathlib import Path

# Add the project root to PYTHONPATH
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

if __name__ == "__main__":
    import uvicorn
    from ecommerce_api.config import get_settings
    from ecommerce_api.core.logging import setup_logging

    settings = get_settings()

    setup_logging(log_level=settings.LOG_LEVEL, is_debug=settings.DEBUG)

    print(f"🚀 Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    print(f"📡 Server: http://{settings.HOST}:{settings.PORT}")
    print(f"📚 Docs: http://{settings.HOST}:{settings.PORT}/docs")
    print(f"📈 Metrics: {'enabled' if settings.ENABLE_METRICS else 'disabled'} ({settings.metrics_namespace})")
    print(f"🔧 Debug mode: {settings.DEBUG}")
    print()

    uvicorn.run(
        "ecommerce_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
