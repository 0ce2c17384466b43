"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_share.api.admin import router as admin_router
from recipe_share.api.categories import router as categories_router
from recipe_share.api.errors import register_exception_handlers
from recipe_share.api.recipes import router as recipes_router
from recipe_share.api.users import router as users_router
from recipe_share.app_logging import configure_logging
from recipe_share.config import parse_allowed_origins
from recipe_share.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    app = FastAPI(title="Recipe Share API")
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(recipes_router)
    app.include_router(users_router)
    app.include_router(categories_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
