import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse

from . import config
from .auth import MANAGER_GROUP, STAFF_MEMBER_GROUP, CognitoTokenVerifier
from .database import Gateway
from .errors import ServerError
from .routes import router as api_router
from .service import CleaningService
from .staff_member import StaffMember, create_cognito_client
from .ui import router as ui_router

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Add file handler for persistent logs
if config.LOG_FILE:
    file_handler = logging.FileHandler(config.LOG_FILE)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    logging.getLogger().addHandler(file_handler)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "status_code": status_code}
    )


def create_app(gateway: Optional[Gateway] = None,
               staff_members: Optional[StaffMember] = None,
               all_users_verifier: Optional[CognitoTokenVerifier] = None,
               managers_verifier: Optional[CognitoTokenVerifier] = None,
               client_dir: Optional[str] = None) -> FastAPI:
    """Build the application.

    Anything not supplied is built from the environment when the app starts.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application startup and shutdown."""
        logger.info("Application startup initiated")

        if getattr(app.state, "gateway", None) is None:
            app.state.gateway = Gateway.from_url(
                config.DATABASE_URL,
                pool_size=config.DB_POOL_SIZE,
                max_overflow=config.DB_MAX_OVERFLOW,
                echo=config.DB_ECHO
            )
        app.state.gateway.create_all()

        if getattr(app.state, "staff_members", None) is None and config.AWS_GET_STAFF_MEMBERS_ACCESS_KEY_ID:
            app.state.staff_members = StaffMember(
                create_cognito_client(
                    config.AWS_REGION,
                    config.AWS_GET_STAFF_MEMBERS_ACCESS_KEY_ID,
                    config.AWS_GET_STAFF_MEMBERS_SECRET_ACCESS_KEY_ID
                ),
                config.AWS_USER_POOL_ID
            )
        if getattr(app.state, "staff_members", None) is None:
            logger.warning("Staff directory credentials are not set, staff member listing is unavailable")

        if getattr(app.state, "all_users_verifier", None) is None:
            app.state.all_users_verifier = CognitoTokenVerifier(
                config.AWS_REGION, config.AWS_USER_POOL_ID, config.AWS_USER_POOL_APP_CLIENT,
                [STAFF_MEMBER_GROUP, MANAGER_GROUP]
            )
        if getattr(app.state, "managers_verifier", None) is None:
            app.state.managers_verifier = CognitoTokenVerifier(
                config.AWS_REGION, config.AWS_USER_POOL_ID, config.AWS_USER_POOL_APP_CLIENT,
                [MANAGER_GROUP]
            )

        app.state.service = CleaningService(app.state.gateway, getattr(app.state, "staff_members", None))
        logger.info("Application startup complete")

        yield

        # Application shutdown
        logger.info("Application shutdown initiated")
        app.state.gateway.dispose()

    app = FastAPI(
        title="LCMS Cleaning",
        lifespan=lifespan,
        docs_url=None,  # Disable docs in production
        redoc_url=None  # Disable redoc in production
    )
    app.state.gateway = gateway
    app.state.staff_members = staff_members
    app.state.all_users_verifier = all_users_verifier
    app.state.managers_verifier = managers_verifier

    @app.exception_handler(ServerError)
    async def server_error_handler(request: Request, exc: ServerError):
        logger.info(f"{request.method} {request.url.path} failed: {exc.status_code} {exc.message}")
        return error_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
        message = f"{field}: {first.get('msg', 'invalid value')}"
        logger.info(f"{request.method} {request.url.path} failed: 400 {message}")
        return error_response(message, 400)

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
        return error_response("Internal server error, please try again later", 500)

    app.include_router(api_router)
    app.include_router(ui_router)

    # Health check endpoints
    @app.get("/up")
    def up():
        return {"status": "ok"}

    @app.get("/health")
    def health(request: Request):
        """Health check that tests the database connection."""
        if not request.app.state.gateway.check_connection():
            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "database": "disconnected",
                    "timestamp": datetime.utcnow().isoformat()
                }
            )
        return {
            "status": "healthy",
            "database": "connected",
            "timestamp": datetime.utcnow().isoformat()
        }

    client_dir = client_dir or config.CLIENT_DIR
    if os.path.isdir(client_dir):
        logger.info(f"Serving client from {client_dir}")
        index_file = os.path.join(client_dir, "index.html")
        client_root = os.path.realpath(client_dir)

        @app.get("/{path:path}", include_in_schema=False)
        def client(path: str):
            file_path = os.path.realpath(os.path.join(client_dir, path))
            if path and file_path.startswith(client_root + os.sep) and os.path.isfile(file_path):
                return FileResponse(file_path)
            return FileResponse(index_file)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("lcms_cleaning.main:app", host="0.0.0.0", port=config.PORT)
