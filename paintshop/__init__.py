"""Paint-line operations dashboard API."""
