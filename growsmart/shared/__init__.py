"""Shared infrastructure used by every module."""
