"""Photo-based plant identification with care guidance and history."""
