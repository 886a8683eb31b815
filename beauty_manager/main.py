import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import models  # noqa: F401
from .config import ALLOWED_ORIGINS, SEED_ADMIN_EMAIL, SEED_ADMIN_PASSWORD
from .database import Base, SessionLocal, engine
from .domain.appointments import router as appointments_router
from .domain.clients import router as clients_router
from .domain.finances import router as finances_router
from .domain.insights import router as insights_router
from .domain.services import router as services_router
from .domain.users import UserService
from .domain.users import auth_router
from .domain.users import router as users_router
from .routes.external_apis import router as external_apis_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


def seed_admin_user() -> None:
    """Create the administrator account when SEED_ADMIN_EMAIL/PASSWORD are set"""
    if not SEED_ADMIN_EMAIL or not SEED_ADMIN_PASSWORD:
        return

    db = SessionLocal()
    try:
        UserService(db).seed_admin(SEED_ADMIN_EMAIL, SEED_ADMIN_PASSWORD)
    except Exception as e:
        logger.error(f"Failed to seed admin user: {e}")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    seed_admin_user()

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Beauty Manager API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Convert 422 validation errors to 401 authentication errors
    when the issue is with the Authorization header
    """
    for error in exc.errors():
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(
                f"Authentication failed for {request.url.path}: Missing or invalid Authorization header"
            )
            return JSONResponse(
                status_code=401,
                content={
                    "detail": "Not authenticated. Please provide a valid Bearer token in the Authorization header."
                },
            )

    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors with exception objects in ``ctx`` turned into strings"""
    errors = []
    for error in exc.errors():
        if "ctx" in error:
            error = {**error, "ctx": {k: str(v) for k, v in error["ctx"].items()}}
        errors.append(error)
    return errors


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(clients_router)
app.include_router(services_router)
app.include_router(appointments_router)
app.include_router(finances_router)
app.include_router(insights_router)
app.include_router(external_apis_router)


@app.get("/")
async def root():
    return {"message": "Beauty Manager API", "version": "1.0.0"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
