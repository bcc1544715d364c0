"""Porchlight: neighborhood reviews API."""
