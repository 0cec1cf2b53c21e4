"""In-memory providers and the container used by the test suite.

Importing ``MockPersistenceProvider`` registers it as the mock subclass of
``PersistenceProvider``.
"""

from .container import build_test_container
from .persistence import MockPersistenceProvider

__all__ = ["MockPersistenceProvider", "build_test_container"]
