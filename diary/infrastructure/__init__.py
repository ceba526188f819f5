"""Infrastructure: document store, repositories, security, external services."""
