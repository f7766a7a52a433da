"""AI farming advisor chat: OpenRouter completions and the direct provider test."""
