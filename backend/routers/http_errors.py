from fastapi import HTTPException, status

from services.errors import (
    ConflictError,
    FileTooLarge,
    InputError,
    ListDistributionError,
    NotFoundError,
)


def to_http_exception(exc: ListDistributionError) -> HTTPException:
    if isinstance(exc, FileTooLarge):
        code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    elif isinstance(exc, InputError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ConflictError):
        code = status.HTTP_409_CONFLICT
    else:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while processing request",
        )
    return HTTPException(status_code=code, detail=exc.message)
