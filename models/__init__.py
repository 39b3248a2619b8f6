"""Core data models for the entity memory."""
