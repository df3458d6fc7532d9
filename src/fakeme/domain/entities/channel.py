"""Channel entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Channel:
    """Channel entity.

    Attributes:
        id: Platform-specific channel ID.
        name: Channel name.
        is_direct: Whether this is a direct (one-to-one or group DM) conversation.
    """

    id: str
    name: str = ""
    is_direct: bool = False
