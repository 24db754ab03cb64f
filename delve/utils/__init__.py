"""Utilities: logging setup and the gameplay event log."""
