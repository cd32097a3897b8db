"""Ingest services: schedule merging, derived stats and the run orchestrator."""
