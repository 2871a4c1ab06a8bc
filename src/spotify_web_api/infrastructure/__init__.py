"""Infrastructure layer: HTTP transport, OAuth and logging."""
