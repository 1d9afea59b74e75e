from .client import FileDockClient

__all__ = ["FileDockClient"]
