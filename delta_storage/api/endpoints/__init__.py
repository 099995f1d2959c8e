"""Typed endpoint functions, one HTTP request each."""
