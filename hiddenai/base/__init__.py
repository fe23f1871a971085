"""Core building blocks: error taxonomy, retry, logging, models, transport."""
