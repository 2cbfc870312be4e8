"""Domain models and errors, free of I/O and framework concerns."""
