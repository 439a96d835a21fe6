"""
Centralized exception handling decorator for API route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler and turns
engine and service errors into :class:`fastapi.HTTPException` responses.
HTTPExceptions raised by the handler pass through untouched.

* :class:`UploadRejected` keeps its own status (``413`` oversize, ``415`` type).
* :class:`InputDecodeError` becomes ``422 cannot parse file``.
* :class:`AnalysisCancelled` becomes ``409``; a newer submission from the same
  client replaced this one.
* Anything else becomes ``500`` with the exception message as detail.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from fastapi import HTTPException, status

from engine.exceptions import AnalysisCancelled, InputDecodeError
from services.analyze_service import CANNOT_PARSE, UploadRejected

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)


def to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, HTTPException):
        return exc
    if isinstance(exc, UploadRejected):
        return HTTPException(status_code=exc.status_code, detail=exc.detail)
    if isinstance(exc, InputDecodeError):
        return HTTPException(status_code=422, detail=CANNOT_PARSE)
    if isinstance(exc, AnalysisCancelled):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    log.exception("unhandled error in route")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def handle_exceptions(func: F) -> F:
    """Decorator that converts uncaught exceptions to HTTP errors.

    Works with both regular and async functions.
    """

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                raise to_http(exc) from exc

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as exc:
            raise to_http(exc) from exc

    return cast(F, sync_wrapper)
