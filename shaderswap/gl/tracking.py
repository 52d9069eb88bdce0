"""Bookkeeping of live GPU object handles.

Every wrapper that allocates a GL object registers it here and releases it
on dispose. :meth:`HandleRegistry.report` is called when the owning context
is torn down, so forgotten objects show up as warnings at a deterministic
point instead of whenever the garbage collector gets to them.
"""

import logging

# Module logger
logger = logging.getLogger(__name__)


class HandleRegistry:
    """Set of ``(kind, handle)`` pairs currently alive on one context."""

    def __init__(self):
        self._live = set()

    def track(self, kind, handle):
        self._live.add((kind, int(handle)))

    def release(self, kind, handle):
        self._live.discard((kind, int(handle)))

    def live(self):
        """Return the live handles as a sorted list of ``(kind, handle)``."""
        return sorted(self._live)

    def __len__(self):
        return len(self._live)

    def report(self):
        """Log a warning for every handle that was never disposed.

        Returns
        -------
        int
            Number of leaked handles.
        """
        leaked = self.live()
        for kind, handle in leaked:
            logger.warning("%s %d was not disposed properly.", kind, handle)
        return len(leaked)
