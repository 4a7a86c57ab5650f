"""Data access for the append-only stores."""
