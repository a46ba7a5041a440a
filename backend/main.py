import logging

from fastapi import FastAPI

from core.config import apply_cors
from core.settings import get_settings
from routers.controller_router import router as controller_router
from routers.editor_router import router as editor_router
from routers.generate_router import router as generate_router
from routers.wizard_router import router as wizard_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="Process Designer")
    settings = get_settings()
    logger.info(
        "Diagram orientation=%s | wizard max sessions=%d",
        settings.diagram.orientation,
        settings.wizard.max_sessions,
    )

    apply_cors(app)

    @app.get("/")
    def root():
        return {"message": "Process Designer bezi!"}

    # Routry
    app.include_router(generate_router)
    app.include_router(wizard_router)
    app.include_router(editor_router)
    app.include_router(controller_router)

    return app


app = create_app()
