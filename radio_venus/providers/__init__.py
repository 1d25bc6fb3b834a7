"""External source adapters, grouped by the kind of data they return."""
