"""Middleware — Protocol-based, no inheritance required.

Built-in middleware:
    CORSMiddleware -- Origin echo and OPTIONS preflight
    CacheNegotiator -- Conditional GET short-circuit and Cache-Control headers
"""

from iconcdn.middleware.cache import CacheNegotiator
from iconcdn.middleware.cors import CORSMiddleware
from iconcdn.middleware.protocol import Middleware, Next

__all__ = [
    "CORSMiddleware",
    "CacheNegotiator",
    "Middleware",
    "Next",
]
