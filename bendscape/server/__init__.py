"""HTTP interface for Bendscape."""
