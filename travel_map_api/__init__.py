"""Record-keeping backend for the travel map application."""
