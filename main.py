from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from typing import Optional
import uvicorn
import logging
from config import API_PREFIX, CORS_ORIGINS, DEBUG, JWT_SECRET, PORT
from database import create_tables
from exceptions import AppError, StorageError
from users.security import TokenService
from users.sample_data import initialize_admin_account

# Import routers
from users.router import router as users_router
from inquiries.router import submission_router, projects_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# Create tables and the bootstrap admin account at startup
@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    logger.info("Database tables created")
    initialize_admin_account()
    yield


def create_app(token_service: Optional[TokenService] = None, bootstrap: bool = True) -> FastAPI:
    # Refuse to start without a signing secret
    if token_service is None:
        token_service = TokenService(JWT_SECRET)

    # Create FastAPI instance with documentation configuration
    app = FastAPI(
        title="Project Inquiry API",
        description="Public project submission form backend with an authenticated admin area",
        version="1.0.0",
        openapi_url=f"{API_PREFIX}/openapi.json",
        docs_url=f"{API_PREFIX}/docs",
        redoc_url=f"{API_PREFIX}/redoc",
        debug=DEBUG,
        lifespan=lifespan if bootstrap else None,
    )
    app.state.token_service = token_service

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Storage faults: generic message plus the driver's error text
    @app.exception_handler(StorageError)
    async def storage_exception_handler(request: Request, exc: StorageError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": "Database error", "error": exc.message}
        )

    # Authentication and login failures
    @app.exception_handler(AppError)
    async def app_exception_handler(request: Request, exc: AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message}
        )

    # Add global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        # Log exception with request details for better debugging
        logger.error(
            f"Global exception: {exc}",
            extra={
                "path": request.url.path,
                "method": request.method,
                "client": request.client.host if request.client else "unknown",
            }
        )
        return JSONResponse(
            status_code=500,
            content={"message": "Internal server error. The error has been logged."}
        )

    # Handle validation errors
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            f"Validation error: {exc}",
            extra={"path": request.url.path}
        )
        return JSONResponse(
            status_code=422,
            content={"message": "Validation error", "errors": jsonable_errors(exc)}
        )

    # Include all routers with appropriate prefixes
    app.include_router(submission_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(projects_router, prefix=API_PREFIX)

    # Root endpoint
    @app.get("/")
    async def root():
        return {
            "message": "Project Inquiry API is running",
            "documentation": f"{API_PREFIX}/docs",
            "redoc": f"{API_PREFIX}/redoc"
        }

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


def jsonable_errors(exc: RequestValidationError):
    # Drop the raw input and exception objects pydantic attaches to each error
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


app = create_app()

# Run the application
if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=PORT, reload=DEBUG)
