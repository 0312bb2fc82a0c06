"""Services that connect the layout engine to files."""
