"""Order dashboard backend: JSON-document order store with read-time de-duplication."""
