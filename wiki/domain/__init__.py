"""Domain records and pure rules (no storage, no HTTP)."""
