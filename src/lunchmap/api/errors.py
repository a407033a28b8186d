"""Translate domain errors into HTTP errors.

Input problems map to 4xx so clients show "fix your input"; store and
provider failures map to 502 so clients offer a retry.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from ..errors import (
    EmptyInputError,
    LunchMapError,
    NoRouteFoundError,
    NotFoundError,
    ProviderError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def to_http_exception(exc: LunchMapError) -> HTTPException:
    if isinstance(exc, (ValidationError, EmptyInputError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, (NotFoundError, NoRouteFoundError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, (ProviderError, StoreError)):
        logger.error(f"Upstream failure: {exc}")
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    logger.exception(f"Unhandled domain error: {exc}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
