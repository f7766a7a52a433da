"""Language onboarding for new farmers."""
