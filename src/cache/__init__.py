"""Cache stores for raw catalog responses."""
