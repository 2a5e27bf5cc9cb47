"""Adapters for external collaborators: completion backends and PDF extraction."""
