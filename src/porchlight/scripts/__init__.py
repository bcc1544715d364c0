"""Operational scripts for the Porchlight application."""
