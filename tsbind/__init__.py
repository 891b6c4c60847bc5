"""Generate TypeScript type declarations and binding files from type descriptions."""

__version__ = "0.1.0"