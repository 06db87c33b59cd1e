"""Generate integration package documentation sections with an LLM."""
