"""Dashboard BFF data transfer objects."""
