"""
Exceptions shared by providers, estimators and the aggregation engine.
"""

from typing import Optional


class APIException(Exception):
    """Basisfehler für alle Upstream-Anfragen"""

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.provider = provider

    def __str__(self) -> str:
        if self.provider:
            return f"[{self.provider}] {self.message}"
        return self.message


class SchemaMismatch(APIException):
    """Upstream answered, but not in the shape we expected"""
    pass


class UpstreamUnavailable(APIException):
    """
    The single error surfaced at the engine boundary.

    Covers transport and schema failures alike; the caller never learns
    which one it was, only which upstream broke the request.
    """

    def __init__(self, source: str, reason: str = ""):
        super().__init__(f"Upstream unavailable: {reason}" if reason else "Upstream unavailable", source)
        self.source = source
        self.reason = reason


class InvalidRequest(Exception):
    """Caller error, detected before any upstream request is made"""
    pass


class UnsupportedChain(InvalidRequest):
    """No activity provider for this chain key, or not for this operation"""

    def __init__(self, chain: str, operation: str = ""):
        message = f"Unsupported chain '{chain}'" + (f" for {operation}" if operation else "")
        super().__init__(message)
        self.chain = chain
        self.operation = operation


class InvalidAddress(InvalidRequest):
    pass
