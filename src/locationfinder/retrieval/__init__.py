"""External place-search capability."""
