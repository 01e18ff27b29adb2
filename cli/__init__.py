"""Command-line entry points of the flag harness."""
