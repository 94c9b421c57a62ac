import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import install_error_handlers
from app.api.routes.admin_categories import router as admin_categories_router
from app.api.routes.admin_feedback import router as admin_feedback_router
from app.api.routes.admin_questions import router as admin_questions_router
from app.api.routes.admin_users import router as admin_users_router
from app.api.routes.ai import router as ai_router
from app.api.routes.auth import router as auth_router
from app.api.routes.categories import router as categories_router
from app.api.routes.feedback import router as feedback_router
from app.api.routes.health import router as health_router
from app.api.routes.leaderboard import router as leaderboard_router
from app.api.routes.quiz import router as quiz_router
from app.api.routes.users import router as users_router
from app.core.config import get_settings
from app.core.logging import configure_logging


def _cors_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level, app_env=settings.app_env)

    app = FastAPI(
        title="Quiz API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    origins = _cors_origins(settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(categories_router)
    app.include_router(quiz_router)
    app.include_router(users_router)
    app.include_router(leaderboard_router)
    app.include_router(feedback_router)
    app.include_router(ai_router)
    app.include_router(admin_categories_router)
    app.include_router(admin_questions_router)
    app.include_router(admin_users_router)
    app.include_router(admin_feedback_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
