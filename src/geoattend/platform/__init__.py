"""Native platform bridges."""
