"""Protocol definitions for the post service."""
from typing import Iterator, Protocol, runtime_checkable

from postdir_lib.posts.models import Post


@runtime_checkable
class PostStreamProtocol(Protocol):
    """A finite, non-restartable sequence of posts holding a store cursor."""

    def __iter__(self) -> Iterator[Post]: ...

    def __next__(self) -> Post: ...

    def close(self) -> None: ...


@runtime_checkable
class PostServiceProtocol(Protocol):
    """Protocol for PostService public surface.

    All methods raise `postdir_lib.posts.errors.PostServiceError`
    subclasses on failure.
    """

    def stream_posts(self) -> PostStreamProtocol:
        """Open a stream over every stored post, in store-native order."""
        ...

    def read_post(self, post_id: str) -> Post:
        """Return the post with the given hex id."""
        ...

    def update_post(self, post_id: str, owner_id: str, title: str, body: str) -> Post:
        """Overwrite owner/title/body of an existing post and return it."""
        ...

    def delete_post(self, post_id: str) -> str:
        """Delete a post and echo its id."""
        ...
