import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskflow.config.security import SecurityConfig
from taskflow.config.settings import settings
from taskflow.exceptions import TaskflowError, ValidationFailure
from taskflow.routers import auth, user, task, dashboard, contact

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=SecurityConfig.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Append the configured security headers to every response"""
    response = await call_next(request)
    for header, value in SecurityConfig.get_response_headers().items():
        response.headers.setdefault(header, value)
    return response

# Domain errors -> JSON responses
@app.exception_handler(TaskflowError)
async def taskflow_error_handler(request: Request, exc: TaskflowError):
    if isinstance(exc, ValidationFailure):
        logger.info(f"Validation failed on {request.url.path}: {exc.detail}")
    else:
        logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.detail}")

    content = {"detail": exc.detail}
    if exc.errors:
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)

# Route registration
app.include_router(auth.router, tags=["Authentication"])
app.include_router(user.router)
app.include_router(task.router)
app.include_router(dashboard.router)
app.include_router(contact.router)

# Root route
@app.get("/")
def read_root():
    return {"message": "Task Manager API"}

@app.get("/health")
def health():
    return {"status": "ok"}
