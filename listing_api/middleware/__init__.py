"""
Middleware package for request tracking and timing.
"""

from .timing import RequestTimingMiddleware

__all__ = ["RequestTimingMiddleware"]
