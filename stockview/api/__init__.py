"""HTTP API: routers, dependencies, and response models."""
