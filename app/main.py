import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.router import router as v1_router
from app.core.config import settings
from app.core.telemetry import setup_telemetry
from app.services.errors import FileTooLargeError, ListError

log = logging.getLogger(__name__)

app = FastAPI(title="List Distribution API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_telemetry(app)
app.include_router(v1_router)

# Room for the multipart boundaries and part headers around the file
UPLOAD_ENVELOPE_BYTES = 64 * 1024


@app.middleware("http")
async def limit_upload_body(request: Request, call_next):
    # The multipart body is spooled before the endpoint runs; refuse it up front.
    if request.method == "POST" and request.url.path == f"{settings.api_prefix}/list/upload":
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > settings.max_upload_bytes + UPLOAD_ENVELOPE_BYTES:
            exc = FileTooLargeError()
            log.warning("POST %s rejected: declared body of %s bytes", request.url.path, declared)
            return JSONResponse(status_code=exc.status_code, content={"message": exc.message})
    return await call_next(request)


@app.exception_handler(ListError)
async def list_error_handler(request: Request, exc: ListError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    else:
        log.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [f"{'.'.join(str(p) for p in err['loc'][1:])}: {err['msg']}" for err in exc.errors()]
    return JSONResponse(status_code=400, content={"message": "Validation failed", "errors": errors})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "message": "Internal server error",
            "error": str(exc) if settings.env == "dev" else "Something went wrong",
        },
    )
