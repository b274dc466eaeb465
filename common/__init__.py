"""Shared building blocks for Folio Tools."""
