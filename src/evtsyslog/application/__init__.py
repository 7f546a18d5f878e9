"""Application layer: ports, use cases, and the subscription manager."""
