"""Search, filter, sort and cache pipeline for the employer discount directory."""

__version__ = "0.1.0"
