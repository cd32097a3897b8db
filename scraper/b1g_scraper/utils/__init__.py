"""Shared helpers for parsing, dates and locks."""
