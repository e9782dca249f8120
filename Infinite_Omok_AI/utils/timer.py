"""Helpers for soft per-move time budgets."""

import time


def deadline_after(seconds):
    return time.time() + seconds


def time_remaining(deadline):
    return deadline - time.time()


def budget_ms(deadline, cap_ms):
    """Milliseconds left before `deadline`, never more than `cap_ms`."""
    if deadline is None:
        return cap_ms
    return max(0, min(cap_ms, int(time_remaining(deadline) * 1000)))
