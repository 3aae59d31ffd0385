"""HTTP middleware: request size limit and request/correlation IDs.

Applied in the app factories; order matters (last added = outermost).
"""

from status_relay.middleware.request_context import RequestContextMiddleware
from status_relay.middleware.request_size_limit import RequestSizeLimitMiddleware

__all__ = ["RequestContextMiddleware", "RequestSizeLimitMiddleware"]
