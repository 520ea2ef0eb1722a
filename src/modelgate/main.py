"""Application entrypoint and FastAPI app factory for modelgate.

Defines the `ModelGateApplication` which:

- Configures logging and CORS middleware
- Builds the process-wide `LLMManager` during app lifespan (via
  `initialize_api()`)
- Registers HTTP routes from `src/modelgate/api/routes.py`
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.routes import initialize_api, router
from .config.settings import Settings
from .llm.manager import LLMManager


class ModelGateApplication:
    """Create and run the modelgate FastAPI application.

    Responsibilities:
    - Provide lifecycle hooks to initialize services
    - Configure CORS and include API routes
    - Expose `create_app()` and `run()` helpers
    """

    def __init__(
        self, settings: Settings | None = None, llm_manager: Optional[LLMManager] = None
    ):
        self.settings = settings or Settings()
        self.llm_manager = llm_manager
        self.app: FastAPI | None = None
        self._setup_logging(self.settings.log_level)
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def _setup_logging(level: str) -> None:
        """Configure application logging."""
        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    def _create_lifespan_manager(self):
        """Create an async lifespan manager that initializes services.

        Returns:
            Callable: An async context manager suitable for FastAPI's
            `lifespan` parameter.
        """

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            self.logger.info(f"Starting {self.settings.app_name}...")
            initialize_api(self.settings, self.llm_manager)
            self.logger.info(f"{self.settings.app_name} started successfully")
            yield
            self.logger.info(f"Shutting down {self.settings.app_name}...")

        return lifespan

    def _configure_middleware(self) -> None:
        """Configure CORS using origins from `Settings.cors_origins`."""
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=self.settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _register_routes(self) -> None:
        """Register application routes including the root info route."""
        self.app.include_router(router)

        @self.app.get("/")
        async def root() -> Dict[str, Any]:
            """Root endpoint providing service information."""
            return {
                "message": self.settings.app_name,
                "version": __version__,
                "status": "running",
            }

    def create_app(self) -> FastAPI:
        """Create and configure the FastAPI application instance.

        Returns:
            FastAPI: Configured app with routes, middleware, and lifespan.
        """
        self.app = FastAPI(
            title=self.settings.app_name,
            description="Provider endpoint resolution and model list caching",
            version=__version__,
            lifespan=self._create_lifespan_manager(),
        )

        self._configure_middleware()
        self._register_routes()

        return self.app

    def run(self) -> None:
        """Run the application server with Uvicorn.

        Honors host/port from `Settings`.
        """
        if not self.app:
            self.create_app()

        if self.app is None:
            raise RuntimeError("Failed to create FastAPI application")

        uvicorn.run(
            self.app,
            host=self.settings.api_host,
            port=self.settings.api_port,
            log_level="info" if not self.settings.debug else "debug",
        )


# Global application instance
modelgate_app = ModelGateApplication()
app = modelgate_app.create_app()


def main() -> None:
    """Main entry point for the application."""
    modelgate_app.run()


if __name__ == "__main__":
    main()
