from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quickcreate.api.v1.accounts.router import router as accounts_router
from quickcreate.api.v1.exercises.router import router as exercises_router
from quickcreate.api.v1.products.router import router as products_router
from quickcreate.api.v1.subaccounts.router import router as subaccounts_router
from quickcreate.core.config import settings
from quickcreate.core.logging_config import configure_logging


def create_app() -> FastAPI:
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(title="QuickCreate API")

    # CORS: the host ERP pages call this API from the browser
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(exercises_router)
    app.include_router(accounts_router)
    app.include_router(subaccounts_router)
    app.include_router(products_router)

    return app


app = create_app()
