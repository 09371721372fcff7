"""Output formats: JSON schema, diagrams, Markdown report."""
