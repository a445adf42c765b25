"""Metro shuttle simulation: two rails, two depots, five stations."""

__version__ = "0.1.0"
