"""Stateless CORS proxy normalizing Taiwan market data sources."""

__version__ = "0.2.0"
