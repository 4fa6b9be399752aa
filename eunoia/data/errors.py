from __future__ import annotations

class StoreError(Exception):
    """A backing store could not be read or written."""
