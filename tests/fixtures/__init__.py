"""Shared test fixtures and constants."""
