from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from vehicle_api.config import settings
from vehicle_api.database import create_tables, engine
from vehicle_api.dependencies import verify_api_key
from vehicle_api.logging_config import setup_logging
from vehicle_api.routers.vehicles import router as vehicles_router
from vehicle_api.utils.exceptions import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        description="Record management API for vehicles",
        version=settings.version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(vehicles_router, prefix=settings.api_prefix, dependencies=[Depends(verify_api_key)])

    @app.get("/health")
    async def health_check():
        return {"status": "UP", "service": "vehicle-registry-api", "version": settings.version}

    return app


app = create_app()
