"""HTTP server module."""
from .server import ExporterServer

__all__ = ["ExporterServer"]
