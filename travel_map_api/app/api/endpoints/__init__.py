"""HTTP endpoints grouped by collection."""
