"""Command-line interface for satpack."""
