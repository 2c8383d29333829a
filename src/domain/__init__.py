"""Domain models for dollar quotations and economy news.

Snapshots are immutable (Pydantic, frozen) and replaced as a whole on each
scrape, so they can be cached and shared between requests without copying.
"""

__all__ = [
    "news",
    "quotes",
]
