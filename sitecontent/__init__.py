"""Content retrieval and rendering pipeline for the personal site."""
