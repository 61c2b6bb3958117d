"""Hivetree tests."""
