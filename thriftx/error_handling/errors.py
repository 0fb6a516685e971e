"""Exception types raised by thriftX collaborators."""


class ThriftXError(Exception):
    """Base class for application errors."""


class RepositoryError(ThriftXError):
    """A listing or favorites storage operation failed.

    Attributes:
        retryable: Whether repeating the operation may succeed
    """

    def __init__(self, message: str, retryable: bool = True):
        super().__init__(message)
        self.retryable = retryable


class ListingValidationError(ThriftXError, ValueError):
    """Listing input cannot be turned into a valid listing."""


class GenerationError(ThriftXError):
    """The generative text service could not produce a result."""


class ListingNotFoundError(RepositoryError):
    """The operation refers to a listing that does not exist."""

    def __init__(self, listing_id: str):
        super().__init__(f"Listing {listing_id} not found", retryable=False)
        self.listing_id = listing_id
