"""
HRMS Employee Service — Access Log Middleware
==============================================

What:  One line per employee request on the `hrms.access` logger, naming the
       operation and the employee it targeted.

Log line:
    update employee=65f1c0... -> 400 in 3.2ms [a1b2c3d4]

    Unrouted paths are logged as `METHOD /path`. 5xx lines are ERROR, 4xx
    WARNING (bad ids, missing records), everything else INFO.

Request and response bodies are never logged (salaries are personal data).
"""

import logging
import time
from typing import Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from hrms.middleware.request_id import request_id_var

logger = logging.getLogger("hrms.access")

EMPLOYEE_PATH = "/employee"

# (method, has id segment) → operation
OPERATIONS = {
    ("GET", False): "list",
    ("POST", False): "create",
    ("PUT", True): "update",
    ("DELETE", True): "delete",
}

# Probe traffic would drown everything else
SKIPPED_PATHS = {"/health"}


def describe_request(method: str, path: str) -> Tuple[str, Optional[str]]:
    """
    Name the employee operation a request maps to.

    Returns:
        (operation, employee id from the path or None). Anything that is not
        an employee route comes back as ("METHOD /path", None).
    """
    trimmed = path.rstrip("/")
    employee_id = None
    if trimmed == EMPLOYEE_PATH:
        has_id = False
    elif trimmed.startswith(EMPLOYEE_PATH + "/") and "/" not in trimmed[len(EMPLOYEE_PATH) + 1:]:
        has_id = True
        employee_id = trimmed[len(EMPLOYEE_PATH) + 1:]
    else:
        return f"{method} {path}", None

    operation = OPERATIONS.get((method, has_id))
    if operation is None:
        return f"{method} {path}", None
    return operation, employee_id


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request except health probes."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        operation, employee_id = describe_request(request.method, request.url.path)
        started = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        status = response.status_code
        level = logging.ERROR if status >= 500 else logging.WARNING if status >= 400 else logging.INFO
        target = f" employee={employee_id}" if employee_id else ""
        rid = request_id_var.get("")

        logger.log(
            level,
            "%s%s -> %d in %.1fms [%s]",
            operation,
            target,
            status,
            elapsed_ms,
            rid,
            extra={
                "request_id": rid,
                "operation": operation,
                "employee_id": employee_id,
                "status": status,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
        return response
