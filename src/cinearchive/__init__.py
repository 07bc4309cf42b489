"""Searchable film catalogue with an admin back-office."""
