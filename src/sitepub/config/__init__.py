"""Configuration: models, settings sources, discovery, and logging."""
