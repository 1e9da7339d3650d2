"""Public site content collections and their admin endpoints."""
