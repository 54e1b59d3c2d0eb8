"""Question feed use cases."""
