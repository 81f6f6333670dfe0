"""Scale, placement and feathering for a selected reference."""
