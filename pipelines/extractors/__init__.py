"""
Data Extractors

Reusable components for fetching data from external sources.
"""

from pipelines.extractors.balldontlie import BalldontlieExtractor

__all__ = [
    "BalldontlieExtractor",
]
