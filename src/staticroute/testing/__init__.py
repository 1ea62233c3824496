"""Test utilities for staticroute servers.

    from staticroute.testing import TestClient
"""

from staticroute.testing.client import TestClient

__all__ = ["TestClient"]
