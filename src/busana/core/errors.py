"""Error envelope for report endpoints.

Route handlers convert unexpected failures into ReportError; the handler
registered in main renders it as ``{"success": false, "error", "details"}``
with a 500 status. The underlying message is only exposed outside
production.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .config import is_production

logger = logging.getLogger(__name__)


class ReportError(Exception):
    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def error_details(exc: ReportError) -> str:
    cause = exc.__cause__ or exc
    return str(cause)


async def report_error_handler(request: Request, exc: ReportError) -> JSONResponse:
    content = {"success": False, "error": exc.message}
    if not is_production():
        content["details"] = error_details(exc)
    logger.error("%s %s failed: %s", request.method, request.url.path, error_details(exc))
    return JSONResponse(status_code=exc.status_code, content=content)
