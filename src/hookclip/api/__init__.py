"""HTTP API for hookclip."""
