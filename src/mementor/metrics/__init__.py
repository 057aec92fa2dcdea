"""Document health metrics."""
