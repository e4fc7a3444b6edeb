"""Infrastructure layer — filesystem traversal, file I/O, and git queries."""
