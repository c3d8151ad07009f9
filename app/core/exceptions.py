"""
Custom exception handlers and error types
"""

from fastapi import Request
from fastapi.responses import JSONResponse
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class ImageMetadataError(Exception):
    """Base exception for every failure of the metadata pipeline"""

    status_code: int = 500

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class AcquisitionError(ImageMetadataError):
    """Exception raised when image bytes cannot be acquired from the request"""


class MissingFieldError(AcquisitionError):
    def __init__(self, field_name: str = "url"):
        super().__init__(
            f'Invalid request body: "{field_name}" is required', "MISSING_FIELD"
        )
        self.field_name = field_name


class InvalidRequestBodyError(AcquisitionError):
    def __init__(self, message: str = "Invalid request body: expected a JSON object"):
        super().__init__(message, "INVALID_REQUEST_BODY")


class InvalidUrlError(AcquisitionError):
    def __init__(self, url: Optional[str] = None):
        super().__init__("Invalid URL provided", "INVALID_URL")
        self.url = url


class UnsupportedProtocolError(AcquisitionError):
    """Raised for any URL scheme other than http/https"""

    def __init__(self, scheme: str):
        super().__init__(
            f"Invalid protocol: {scheme}. Only http and https URLs are supported",
            "UNSUPPORTED_PROTOCOL",
        )
        self.scheme = scheme


class UpstreamFetchError(AcquisitionError):
    """Exception raised when the remote image cannot be fetched

    Args:
        reason (str): Upstream status text or transport error
        status (Optional[int]): Upstream HTTP status, when a response was received
    """

    def __init__(self, reason: str, status: Optional[int] = None):
        super().__init__(f"Failed to fetch image: {reason}", "UPSTREAM_FETCH_FAILED")
        self.status = status


class NotAnImageError(AcquisitionError):
    def __init__(self, content_type: Optional[str] = None):
        super().__init__("Fetched URL is not a valid image", "NOT_AN_IMAGE")
        self.content_type = content_type


class UnsupportedContentTypeError(AcquisitionError):
    def __init__(self, content_type: Optional[str] = None):
        super().__init__(
            "Invalid content type. Expected application/json or image binary",
            "UNSUPPORTED_CONTENT_TYPE",
        )
        self.content_type = content_type


class PayloadTooLargeError(AcquisitionError):
    def __init__(self, size: int, limit: int):
        super().__init__(
            f"Image too large: {size / (1024 * 1024):.2f} MiB "
            f"(maximum is {limit / (1024 * 1024):.2f} MiB)",
            "PAYLOAD_TOO_LARGE",
        )
        self.size = size
        self.limit = limit


class EmptyImageError(ImageMetadataError):
    """Client error: the acquired payload has no bytes"""

    status_code = 400

    def __init__(self):
        super().__init__("Invalid image data", "EMPTY_IMAGE")


class ModelInvocationError(ImageMetadataError):
    """Exception raised when the vision model call itself fails"""

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message, "MODEL_INVOCATION_ERROR")
        self.provider = provider


class MalformedModelOutputError(ImageMetadataError):
    """Exception raised when no JSON object can be recovered from model text"""

    EXCERPT_LENGTH = 500

    def __init__(self, raw_text: str):
        self.raw_excerpt = raw_text[: self.EXCERPT_LENGTH]
        super().__init__(
            "AI generation failed to produce valid JSON. "
            f"Raw output: {self.raw_excerpt}",
            "MALFORMED_MODEL_OUTPUT",
        )


async def image_metadata_exception_handler(
    request: Request, exc: ImageMetadataError
) -> JSONResponse:
    """Render pipeline failures as {"error": message}"""
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed [%s]: %s",
            request.method,
            request.url.path,
            exc.error_code,
            exc.message,
        )
    else:
        logger.info(
            "%s %s rejected [%s]: %s",
            request.method,
            request.url.path,
            exc.error_code,
            exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

