"""Output — unified diff bytes, terminal summary, JSON report."""
