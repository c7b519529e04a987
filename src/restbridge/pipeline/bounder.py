"""Response body size bounding, measured in UTF-8 bytes."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BoundedBody:
    body: str
    truncated: bool
    original_size: int

    @property
    def returned_size(self) -> int:
        return len(self.body.encode("utf-8"))


def bound(body: str, limit: int) -> BoundedBody:
    """
    Clip body to at most `limit` bytes.

    A multi-byte character that would be split at the limit is dropped
    entirely, so the result can be shorter than `limit` but is always valid.

    Raises:
        ValueError: if limit is not positive
    """
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")

    encoded = body.encode("utf-8")
    size = len(encoded)
    if size <= limit:
        return BoundedBody(body=body, truncated=False, original_size=size)

    # Only the tail of a valid prefix can be invalid; "ignore" drops it.
    clipped = encoded[:limit].decode("utf-8", errors="ignore")
    return BoundedBody(body=clipped, truncated=True, original_size=size)
