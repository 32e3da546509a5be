"""Salesboard: a FastAPI service reporting on seeded product-sale records."""
