"""Response normalizers for the dashboard BFF resources."""
