"""Command-line interface for mdtag."""
