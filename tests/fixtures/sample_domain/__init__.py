"""Domain model used to exercise the builder generators."""
