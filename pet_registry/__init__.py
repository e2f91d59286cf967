"""Per-user pet registry API."""
