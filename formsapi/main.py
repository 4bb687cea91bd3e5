import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from formsapi.config import config, env_state
from formsapi.database import database
from formsapi.errors import FormsError, MalformedPattern, PersistenceFailure
from formsapi.logging_conf import configure_logging
from formsapi.models.api import failure
from formsapi.models.form import FieldError
from formsapi.rate_limit import limiter
from formsapi.routers.analytics import router as analytics_router
from formsapi.routers.form import router as form_router
from formsapi.routers.health import router as health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # connect database
    await database.connect()
    yield
    # disconnect database
    await database.disconnect()


app = FastAPI(
    title="Forms API",
    description="API for dynamic form submissions and analytics",
    lifespan=lifespan,
)

# added before CORS so that CORS wraps 429 responses too
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"{request.method} {request.url.path} - {response.status_code} - {duration_ms:.0f}ms"
    )
    return response


def envelope(status_code: int, body) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(FormsError)
async def forms_error_handler(request: Request, exc: FormsError):
    if isinstance(exc, MalformedPattern):
        errors = [FieldError(field=f"fields.{exc.field}.validation.pattern", message=str(exc))]
        return envelope(exc.status_code, failure(exc.message, errors=errors))
    if isinstance(exc, PersistenceFailure):
        logger.error(f"Persistence failure on {request.method} {request.url.path}: {exc}")
        detail = str(exc) if env_state == "dev" else "Something went wrong"
        return envelope(exc.status_code, failure(exc.message, detail))
    return envelope(exc.status_code, failure(exc.message, exc.detail))


# SlowAPIMiddleware calls this handler synchronously
@app.exception_handler(RateLimitExceeded)
def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)}: {exc.detail}")
    return envelope(429, failure("Too many requests from this IP, please try again later", "Rate limit exceeded"))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err["loc"] if part not in ("body", "query", "path")]
        message = err["msg"].removeprefix("Value error, ")
        errors.append(FieldError(field=".".join(loc), message=message))
    logger.debug(f"Request validation failed on {request.url.path}: {len(errors)} errors")
    return envelope(400, failure("Validation failed", errors=errors))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        body = failure("Route not found", f"Cannot {request.method} {request.url.path}")
    else:
        body = failure(str(exc.detail))
    return envelope(exc.status_code, body)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    detail = str(exc) if env_state == "dev" else "Something went wrong"
    return envelope(500, failure("Internal server error", detail))


app.include_router(health_router, tags=["Health"])
app.include_router(form_router, prefix="/api/forms", tags=["Forms"])
app.include_router(analytics_router, prefix="/api/analytics", tags=["Analytics"])
