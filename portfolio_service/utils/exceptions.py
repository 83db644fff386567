# utils/exceptions.py

"""
Domain exceptions raised by the portfolio service.
"""

from typing import Optional


class PortfolioServiceError(Exception):
    """Base class for service errors carrying a user facing message"""

    status_code: int = 400

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationFailure(PortfolioServiceError):
    """Input failed a business rule check"""


class FeedFetchError(PortfolioServiceError):
    """Every provider failed for a feed"""

    status_code = 502


class InvalidEnvelopeError(PortfolioServiceError):
    """Encrypted payload is not a valid envelope"""


class DecryptionError(PortfolioServiceError):
    """Wrong passphrase or tampered ciphertext"""


class PdfProcessingError(PortfolioServiceError):
    """PDF could not be read or written"""


class ImageProcessingError(PortfolioServiceError):
    """Image could not be decoded or encoded"""


class UploadError(PortfolioServiceError):
    """Chunked upload could not be stored or assembled"""


class PayloadTooLargeError(PortfolioServiceError):
    """Upload exceeds a configured limit"""

    status_code = 413


class AuthenticationError(PortfolioServiceError):
    """Missing, invalid or expired credentials"""

    status_code = 401


class ItemNotFoundError(PortfolioServiceError):
    """Requested resource does not exist"""

    status_code = 404
