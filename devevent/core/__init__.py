"""Cross-cutting infrastructure: auth, database handle, media, utilities."""
