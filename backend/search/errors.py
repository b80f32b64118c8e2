"""Error taxonomy for the job search core."""


class SearchError(Exception):
    """Base class for every failure raised by the search components."""


class ValidationError(SearchError):
    """Malformed caller input rejected at the API boundary."""


class NotFoundError(SearchError):
    """Unknown subscriber, or external response missing the requested country."""


class PersistenceError(SearchError):
    """Internal store failure."""


class TransportError(SearchError):
    """External source unreachable or answered with a non-success status."""


class DecodeError(SearchError):
    """Malformed external response body or embedded skills markup."""
