"""QuoteWall command-line application."""
