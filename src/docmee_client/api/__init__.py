"""HTTP API for the docmee client service."""
