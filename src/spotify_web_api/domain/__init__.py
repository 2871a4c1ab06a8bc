"""Domain layer: exceptions, ports, value objects and wire models."""
