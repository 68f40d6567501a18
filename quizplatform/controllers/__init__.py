"""Request handlers, independent of the HTTP layer."""
