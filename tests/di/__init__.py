"""In-memory providers and the test container.

Importing this package registers the mock persistence provider as a
subclass of ``PersistenceProvider``, which is how it gets selected.
"""

from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "build_test_container",
]
