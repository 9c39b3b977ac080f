"""Infrastructure implementations for the identity core."""
