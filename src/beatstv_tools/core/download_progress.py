"""Percentage bookkeeping for streamed downloads.

The tracker turns raw byte counts into integer percentages and decides
when a new value is worth reporting.
"""

from __future__ import annotations


class DownloadProgress:
    """Tracks bytes received against an optional total size.

    A total of ``0`` (or less) means the size is unknown: bytes are still
    counted but :meth:`advance` never reports a percentage.
    """

    def __init__(self, total: int) -> None:
        self.total: int = max(total, 0)
        self.downloaded: int = 0
        self._last_emitted: int = 0

    @property
    def known_total(self) -> bool:
        return self.total > 0

    def advance(self, received: int) -> int | None:
        """Record *received* bytes.

        Returns the new percentage when it is strictly greater than the
        last one reported, else ``None``.
        """
        self.downloaded += received
        if not self.known_total:
            return None

        percent = min(self.downloaded * 100 // self.total, 100)
        if percent > self._last_emitted:
            self._last_emitted = percent
            return percent
        return None
