from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class LayoutLensException(HTTPException):
    """Base exception for LayoutLens API errors"""

    def __init__(
        self, status_code: int, detail: Any = None, headers: Optional[Dict[str, str]] = None
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class ProjectNotFoundError(LayoutLensException):
    """Raised when a project ID is not in the store"""

    def __init__(self, detail: str = "Project not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class StoreUnavailableError(LayoutLensException):
    """Raised when the store lock cannot be acquired in time"""

    def __init__(self, detail: str = "Project store is busy, try again later"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            headers={"Retry-After": "1"},
        )
