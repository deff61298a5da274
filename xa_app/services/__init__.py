"""Pipeline stages and supporting services."""
