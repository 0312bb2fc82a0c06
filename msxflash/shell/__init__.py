"""Command-line shell around the msxflash layout engine."""
