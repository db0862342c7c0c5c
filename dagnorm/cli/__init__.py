"""Command implementations for the dagnorm CLI."""
