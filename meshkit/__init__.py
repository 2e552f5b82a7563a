"""Helpers for cloud native management tools: errors, versions, SVG, templates, archives, Kubernetes and compose files."""

__version__ = "0.1.0"