"""HTTP interface for the template clause editor."""
