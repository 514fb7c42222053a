"""Database access (Turso/libSQL)."""
