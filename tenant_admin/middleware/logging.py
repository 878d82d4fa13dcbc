from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import time
from datetime import datetime, timezone

from tenant_admin.utils.logger import get_logger

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"
        logger.info(f"Request: {request.method} {request.url.path} from {client_ip}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Error: {request.method} {request.url.path} -> {type(e).__name__}: {str(e)} ({process_time:.4f}s)",
                exc_info=True,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "detail": "Internal server error",
                    "timestamp": datetime.now(timezone.utc).isoformat()
                }
            )

        self._log_response(request, response, time.time() - start_time)
        return response

    def _log_response(self, request: Request, response: Response, process_time: float):
        """Log outgoing response, level by status code"""
        status_code = response.status_code
        message = f"Response: {request.method} {request.url.path} -> {status_code} ({process_time:.4f}s)"
        if status_code >= 500:
            logger.error(message)
        elif status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)
