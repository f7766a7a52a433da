"""Feature modules of the Grow Smart application."""
