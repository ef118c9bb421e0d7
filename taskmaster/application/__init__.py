"""Application layer: workflows and use cases."""
