"""Admin account management endpoints."""
