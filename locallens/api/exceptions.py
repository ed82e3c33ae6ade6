"""Custom exceptions for the LocalLens API.

Defines specific exception types for better error handling and reporting.
Messages are meant to be shown to the user as-is.
"""

from typing import Any, Dict, Optional

LOCATION_UNAVAILABLE_MESSAGE = (
    "Unable to retrieve your location. Please enable location services."
)
ANALYSIS_FAILED_MESSAGE = (
    "Failed to analyze image. Please ensure your API key is configured correctly."
)


class LocalLensException(Exception):
    """Base exception for LocalLens errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for API responses
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class LocationUnavailableError(LocalLensException):
    """Raised when the caller's location cannot be determined."""

    def __init__(
        self,
        message: str = LOCATION_UNAVAILABLE_MESSAGE,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, status_code=400, details=details)


class ImageAnalysisError(LocalLensException):
    """Raised when an image cannot be turned into keywords."""

    def __init__(self, error: Optional[Exception] = None):
        details: Dict[str, Any] = {}
        if error is not None:
            details = {"error": str(error), "error_type": type(error).__name__}
        super().__init__(
            message=ANALYSIS_FAILED_MESSAGE,
            status_code=502,
            details=details,
        )


class InvalidImageError(LocalLensException):
    """Raised when an uploaded image is empty or not an image."""

    def __init__(self, mime_type: Optional[str], reason: str):
        super().__init__(
            message=f"Invalid image upload: {reason}",
            status_code=400,
            details={"mime_type": mime_type},
        )


class ShopNotFoundError(LocalLensException):
    """Raised when a shop id is not in the catalog."""

    def __init__(self, shop_id: str):
        super().__init__(
            message=f"Shop with id {shop_id} not found.",
            status_code=404,
            details={"shop_id": shop_id},
        )


class ShopAlreadyExistsError(LocalLensException):
    """Raised when creating a shop whose id is already taken."""

    def __init__(self, shop_id: str):
        super().__init__(
            message=f"Shop with id {shop_id} already exists.",
            status_code=409,
            details={"shop_id": shop_id},
        )


class CatalogWriteError(LocalLensException):
    """Raised when the catalog cannot be written to the store."""

    def __init__(self, shop_id: str):
        super().__init__(
            message="Failed to save the catalog. Please try again.",
            status_code=503,
            details={"shop_id": shop_id},
        )
