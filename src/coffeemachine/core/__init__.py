"""Core models, transitions and the command interpreter."""
