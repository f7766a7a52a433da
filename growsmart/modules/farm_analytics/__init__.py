"""Farm records, activities and the analytics summary."""
