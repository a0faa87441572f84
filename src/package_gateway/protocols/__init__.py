"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the metadata store or the list cache backend
- Unit testing with in-memory implementations
- Clear separation of concerns
"""

from .package_list_cache import PackageListCache
from .package_store import PackageStore

__all__ = [
    "PackageListCache",
    "PackageStore",
]
