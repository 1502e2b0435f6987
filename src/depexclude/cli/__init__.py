"""Command-line interface for depexclude."""
