"""Core models and schemas shared by the API layer."""
