"""Election observer account management."""
