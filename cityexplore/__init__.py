"""City Explore: proximity place discovery backed by Overpass API mirrors."""

__version__ = "1.0.0"
