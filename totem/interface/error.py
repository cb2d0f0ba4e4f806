"""Interface layer error mapping.

Domain failures travel in-band as tagged responses; this table picks the
HTTP status each error code is served with.
"""

from fastapi import status

ERROR_STATUS: dict[str, int] = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "label_not_found": status.HTTP_404_NOT_FOUND,
    "already_inactive": status.HTTP_409_CONFLICT,
    "not_liked": status.HTTP_409_CONFLICT,
    "quota_exhausted": status.HTTP_429_TOO_MANY_REQUESTS,
    "unauthenticated": status.HTTP_401_UNAUTHORIZED,
    "concurrent_modification": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for_error(code: str | None) -> int:
    """HTTP status for an error code (400 for unknown codes)."""
    if code is None:
        return status.HTTP_200_OK
    return ERROR_STATUS.get(code, status.HTTP_400_BAD_REQUEST)
