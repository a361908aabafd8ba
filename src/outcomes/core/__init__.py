"""Core value types: the tri-state Option, the Outcome algebra and WormCell."""
