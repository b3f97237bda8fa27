from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from harbormaster.config import Config


class AuthMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, token: str = None):
        super().__init__(app)
        self.token = token

    async def dispatch(self, request: Request, call_next):
        if request.url.path.startswith("/docs") or request.url.path.startswith("/openapi.json"):
            return await call_next(request)

        # An unset key locks the API rather than opening it
        expected = self.token or Config.API_KEY
        auth_header = request.headers.get("X-API-Key")
        if not expected or auth_header != expected:
            return JSONResponse(status_code=403, content={"detail": "Unauthorized"})
        return await call_next(request)
