"""Output port: where serialized calendars go."""

from __future__ import annotations

from typing import Any, Protocol


class ByteSink(Protocol):
    """
    Anything that accepts encoded content lines: an open binary file,
    `io.BytesIO`, a socket wrapper, `sys.stdout.buffer`.

    The sink is owned by the caller and used exclusively for one write pass.
    Exceptions raised by `write` are not caught; they reach the caller as-is.
    """

    def write(self, data: bytes, /) -> Any:
        """Append `data`. Return value is ignored."""
        ...
