"""Adapters for external chat platforms."""
