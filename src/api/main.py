import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.dependencies import provider_config
from api.routers import ai, ops

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="TaskMaster AI", version="1.0.0")
app.include_router(ai.router, prefix="/ai")
app.include_router(ops.router)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        loc = ".".join(str(p) for p in errors[0].get("loc", ()) if p != "body")
        message = f"{loc}: {errors[0].get('msg', 'invalid value')}" if loc else errors[0].get("msg", "")
    else:
        message = "Invalid request"
    logger.info(f"Rejected {request.url.path}: {message}")
    return _error(400, message)


@app.on_event("startup")
async def startup() -> None:
    logger.info(f"Task analysis configured with {provider_config!r}")


@app.get("/")
async def root() -> dict:
    return {
        "message": "TaskMaster AI Backend API",
        "version": app.version,
        "status": "operational",
    }
