"""Domain rules for application records (validation, search predicates)."""
