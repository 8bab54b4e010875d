"""HTTP middleware. Applied in site_content.main; first added = outermost."""

from site_content.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
