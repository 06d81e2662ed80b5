"""Controller construction by name and the built-in controllers."""
