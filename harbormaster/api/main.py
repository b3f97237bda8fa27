from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from harbormaster.api.middleware import AuthMiddleware
from harbormaster.api.routes import dns, floating_ips, nodes
from harbormaster.errors import (
    AuthError,
    ConfigError,
    ConflictError,
    HarbormasterError,
    NotFoundError,
    PollTimeoutError,
)
from harbormaster.utils import setup_logging

load_dotenv()
setup_logging("harbormaster")

app = FastAPI(title="HarborMaster")
app.add_middleware(AuthMiddleware)

app.include_router(nodes.router)
app.include_router(dns.router)
app.include_router(floating_ips.router)

ERROR_STATUS = (
    (ConfigError, 500),
    (ConflictError, 409),
    (NotFoundError, 404),
    (PollTimeoutError, 504),
    (AuthError, 502),
)


@app.exception_handler(HarbormasterError)
async def harbormaster_error_handler(request: Request, exc: HarbormasterError):
    status_code = next((code for kind, code in ERROR_STATUS if isinstance(exc, kind)), 502)
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )
