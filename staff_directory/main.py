import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from staff_directory.core import config
from staff_directory.core.logging_config import setup_logging
from staff_directory.routes import auth_routes, employee_routes
from staff_directory.services.directory_service import DirectoryService, build_directory_service

logger = logging.getLogger(__name__)


def create_app(service: DirectoryService | None = None) -> FastAPI:
    setup_logging(config.LOG_LEVEL)
    config.validate_runtime_config()

    app = FastAPI(title='Staff Directory API')
    app.state.directory = service or build_directory_service()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.get('/')
    def root():
        return {'status': 'Staff Directory API running'}

    app.include_router(auth_routes.router, prefix='/auth')
    app.include_router(employee_routes.router, prefix='/employees')

    logger.info(
        'Staff directory ready with %d employees (env=%s)',
        len(app.state.directory.store),
        config.APP_ENV,
    )
    return app


app = create_app()
