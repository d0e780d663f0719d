import logging

logger = logging.getLogger(__name__)


class MarketplaceError(Exception):
    """Base error carrying a client-facing message and HTTP status."""
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class AuthenticationRequired(MarketplaceError):
    status_code = 401

    def __init__(self, message='Authentication required'):
        super().__init__(message)


class PermissionDenied(MarketplaceError):
    status_code = 403

    def __init__(self, message='Not authorized'):
        super().__init__(message)


class NotFoundError(MarketplaceError):
    status_code = 404


class ValidationError(MarketplaceError):
    status_code = 400


class ConflictError(MarketplaceError):
    """Business-rule conflict, e.g. a product that is no longer for sale."""
    status_code = 400


class InvalidOperationError(MarketplaceError):
    status_code = 400


def register_error_handlers(api):
    @api.errorhandler(MarketplaceError)
    def handle_marketplace_error(error):
        if error.status_code >= 500:
            logger.error(f"Marketplace error: {error.message}")
        return {'message': error.message}, error.status_code
