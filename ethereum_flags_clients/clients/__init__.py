"""Client families supported by the harness."""
