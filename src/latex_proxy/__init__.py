"""Gateway that packs LaTeX projects and forwards them to a remote compiler."""

__version__ = "0.1.0"
