"""
HRMS Employee Service — Custom Exception Hierarchy
===================================================

What:  Application exceptions raised by the service layer and turned into HTTP
       responses by the handlers registered in `hrms.main`.
How:   Each exception carries a `message` (sent to the client verbatim as
       text/plain) and an optional `context` dict (logged, never sent).

Exception Hierarchy:
    HRMSError (base)
    ├── ValidationError    → 400 Bad Request (bad id, undecodable body)
    ├── NoDocumentsError   → 400 Bad Request (update matched nothing)
    ├── NotFoundError      → 404 Not Found   (delete matched nothing)
    └── DatabaseError      → 500 Internal Server Error (raw driver text)

"Record absent" is 400 on update and 404 on delete. Clients already depend
on both codes, so the split is kept as-is.
"""

from typing import Any, Dict, Optional

NO_DOCUMENTS_MESSAGE = "mongo: no documents in result"


class HRMSError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Text returned as the response body
        context:  Debug info for the server log only
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HRMSError):
    """
    Client input could not be decoded.

    When:  Path id is not a valid ObjectId, or the JSON body cannot be parsed
           or coerced into an employee.
    HTTP:  400 Bad Request
    """

    def __init__(
        self,
        message: str = "Bad Request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NoDocumentsError(HRMSError):
    """
    A find-and-update matched no document.

    HTTP:  400 Bad Request, body `mongo: no documents in result`
    """

    def __init__(
        self,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=NO_DOCUMENTS_MESSAGE, context=ctx)


class NotFoundError(HRMSError):
    """
    A delete matched no document.

    HTTP:  404 Not Found
    """

    def __init__(
        self,
        resource: str = "employee",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message="Not Found", context=ctx)


class DatabaseError(HRMSError):
    """
    Any other failure reported by the driver.

    HTTP:  500 Internal Server Error. The message is the driver's own error
    text and is returned to the client unchanged.
    """

    def __init__(
        self,
        message: str = "Internal Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
