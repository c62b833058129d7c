"""FastAPI application package for the travel map records API."""
