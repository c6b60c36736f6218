"""Presentation layer: command-line entry points and output formatting."""
