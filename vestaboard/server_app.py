"""
ServerApp - Composition Root

This module contains the ServerApp class, which is responsible for:
- Loading configuration
- Wiring the compositor and the transport together
- FastAPI application setup and lifecycle (closing the transport on shutdown)
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .board import Board
from .compositor import Compositor
from .config import VestaboardConfig, default_config, load_from_toml
from .document import Document
from .transport import Transport, create_transport

logger = logging.getLogger(__name__)


class ServerApp:
    """
    Application composition root for the render server.

    Rendering is synchronous and stateless; the only resource owned here is the
    transport's HTTP client.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        config: Optional[VestaboardConfig] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config_path = config_path or Path("config.toml")
        self.config = config or self._load_configuration()
        self.compositor = Compositor(self.config.board.rows, self.config.board.cols)
        self.transport: Optional[Transport] = create_transport(
            self.config.transport, http_transport=http_transport
        )
        self.app: Optional[FastAPI] = None

        logger.info(
            f"ServerApp initialized: board={self.config.board.rows}x{self.config.board.cols}, "
            f"transport={self.config.transport.kind}"
        )

    def render(self, data: Dict[str, Any]) -> Board:
        document = Document.from_dict(data, self.compositor.rows, self.compositor.cols)
        return self.compositor.render(document)

    async def shutdown(self) -> None:
        logger.info("Shutting down server application...")
        if self.transport is not None:
            await self.transport.close()

    def get_fastapi_app(self) -> FastAPI:
        if self.app is None:
            self.app = self._create_fastapi_app()
        return self.app

    def _load_configuration(self) -> VestaboardConfig:
        if self.config_path.exists():
            logger.info(f"Loading configuration from {self.config_path}")
            return load_from_toml(self.config_path)
        logger.warning(
            f"Config file {self.config_path} not found, using default configuration"
        )
        return default_config()

    def _create_fastapi_app(self) -> FastAPI:
        @asynccontextmanager
        async def lifespan(app: FastAPI):
            try:
                yield
            finally:
                await self.shutdown()

        app = FastAPI(
            title="Vestaboard Render Server",
            description="Render VBML documents to split-flap boards",
            version="0.1.0",
            lifespan=lifespan,
        )
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._allowed_origins(),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        from .api import router

        app.state.server = self
        app.include_router(router, prefix="/api")
        logger.debug("Created FastAPI application")
        return app

    def _allowed_origins(self) -> list[str]:
        raw = os.getenv("ALLOWED_ORIGINS", "*").strip()
        if raw == "*" or raw == "":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]
