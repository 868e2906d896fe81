"""Central re-exports for package-local Protocols.

The canonical definitions live beside their implementations.
"""

from postdir_lib.storage.interfaces import PostStoreProtocol
from postdir_lib.posts.interfaces import PostServiceProtocol, PostStreamProtocol

__all__ = [
    "PostStoreProtocol",
    "PostServiceProtocol",
    "PostStreamProtocol",
]
