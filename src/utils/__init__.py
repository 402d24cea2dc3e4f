"""Shared utilities for the node portal."""
