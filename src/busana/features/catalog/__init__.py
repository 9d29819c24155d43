"""Product catalog with current stock levels."""
