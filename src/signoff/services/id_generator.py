"""Prefixed ID generation utility."""

import time
import uuid


def generate_id(prefix: str, time_ordered: bool = False) -> str:
    """Generate a prefixed unique ID.

    Args:
        prefix: The prefix (e.g., "thr_", "appr_", "evt_").
        time_ordered: Lead with the creation time in nanoseconds so that
            ids sort lexicographically in creation order.

    Returns:
        A string like "appr_a1b2c3d4e5f6a7b8", or
        "appr_18a7c0d2e4f61b20a1b2c3d4" when time-ordered.
    """
    if time_ordered:
        return f"{prefix}{time.time_ns():016x}{uuid.uuid4().hex[:8]}"
    short_uuid = uuid.uuid4().hex[:16]
    return f"{prefix}{short_uuid}"
