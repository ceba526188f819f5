"""ASGI middleware: request id and authentication."""
