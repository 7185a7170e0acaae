"""Command-line interface for the student service."""
