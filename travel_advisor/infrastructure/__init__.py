"""Infrastructure: logging, LLM gateway and retry."""
