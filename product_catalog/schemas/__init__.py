"""Schemas Layer — request DTOs consumed by the product service."""
