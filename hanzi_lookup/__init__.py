"""Ranking of Chinese characters against analysed handwriting substrokes."""

__version__ = "1.0.0"

__all__ = [
    "chardata",
    "cubic_curve",
    "entities",
    "match_collector",
    "matcher",
    "scoring",
]