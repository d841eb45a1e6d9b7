"""Command-line interface for context-generator."""
