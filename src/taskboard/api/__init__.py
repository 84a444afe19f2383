from .client import RestClient
from .errors import BackendError, RequestError, TransportError

__all__ = ["BackendError", "RequestError", "RestClient", "TransportError"]
