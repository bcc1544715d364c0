"""HTTP API for the Porchlight application."""
