"""Command-line interface for borshkit."""
