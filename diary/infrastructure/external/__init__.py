"""External integrations: email delivery and LLM completion."""
