from __future__ import annotations

import random

QUOTES = (
    "A little every day beats putting it off.",
    "Do what you can finish today.",
    "Focus on progress, not perfection.",
    "Today may be hard, but giving up will not make it lighter.",
    "Discipline today = freedom tomorrow.",
)


def pick_quote(rng: random.Random | None = None) -> str:
    return (rng or random).choice(QUOTES)


__all__ = ["QUOTES", "pick_quote"]
