"""Test utilities for iconcdn applications::

    from iconcdn.testing import TestClient
"""

from iconcdn.testing.client import TestClient

__all__ = ["TestClient"]
