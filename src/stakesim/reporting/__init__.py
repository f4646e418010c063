"""Report export and charts."""
