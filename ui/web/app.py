"""
FastAPI Application - Main web application setup
===============================================

This module creates and configures the FastAPI application
with its routes, middleware, and templates.
"""

from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.templating import Jinja2Templates
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from core.config import Config, load_config
from core.exceptions import UIError
from core.logging import get_logger
from rules.loader import build_matcher
from services.chat import ChatService

logger = get_logger("web.app")

TEMPLATES_DIR = Path(__file__).parent / "templates"


def create_app(
    config: Optional[Config] = None,
    service: Optional[ChatService] = None,
    debug: bool = False
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration
        service: Chat service (built from config when omitted)
        debug: Enable debug mode

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = load_config()

    if service is None:
        service = ChatService(
            build_matcher(config),
            max_input_length=config.ui.max_input_length
        )

    app = FastAPI(
        title=config.app_name,
        description="Web interface for Eliza Chat",
        version=config.version,
        debug=debug or config.ui.web_debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    app.state.config = config
    app.state.chat_service = service
    app.state.templates = templates

    from .routes import router as main_router
    app.include_router(main_router, prefix="")

    @app.exception_handler(UIError)
    async def ui_error_handler(request: Request, exc: UIError):
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc) if debug else "An error occurred"}
        )

    logger.info("Web application created")

    return app


def run_app(
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
    config: Optional[Config] = None
) -> None:
    """
    Run the web application server.

    Args:
        host: Host address to bind
        port: Port to listen on
        debug: Enable debug mode
        config: Application configuration
    """
    if config is None:
        config = load_config()

    app = create_app(config=config, debug=debug)

    logger.info(f"Starting web server on {host}:{port}")

    import uvicorn
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="debug" if debug else "info"
    )
