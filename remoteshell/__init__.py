"""A minimal TCP remote shell with a threaded server and an interactive client."""

__version__ = "0.1.0"
__all__ = ["protocol", "server", "client"]