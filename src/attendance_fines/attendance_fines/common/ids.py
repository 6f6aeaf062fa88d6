from __future__ import annotations

import uuid


def new_id(prefix: str) -> str:
    """Short upper-case identifier, e.g. ``FINE-1A2B3C4D``."""
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"
