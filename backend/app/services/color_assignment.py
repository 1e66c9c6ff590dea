"""Stable color buckets for subject and class identifiers."""

PALETTE = (
    "#60a5fa",
    "#34d399",
    "#fbbf24",
    "#f472b6",
    "#a78bfa",
    "#f87171",
    "#22d3ee",
    "#f59e0b",
    "#10b981",
    "#c084fc",
)


def color_index(identifier: str, palette_size: int = len(PALETTE)) -> int:
    if palette_size <= 0:
        raise ValueError("palette_size must be positive")
    return sum(ord(char) for char in identifier) % palette_size


def color_for(identifier: str) -> str:
    return PALETTE[color_index(identifier)]
