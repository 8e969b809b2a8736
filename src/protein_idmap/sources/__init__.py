"""Adapters for external annotation services."""
