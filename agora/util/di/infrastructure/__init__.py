"""Providers for components backed by external systems.

``ProdPersistenceProvider`` is imported so that it is registered as a
subclass of ``PersistenceProvider`` before provider selection runs.
"""

from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = ["PersistenceProvider", "ProdPersistenceProvider"]
