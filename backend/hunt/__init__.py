"""Treasure hunt qualifier backend."""
