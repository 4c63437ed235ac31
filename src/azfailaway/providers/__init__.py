"""AWS provider."""
