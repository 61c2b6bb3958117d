"""Hivetree unit tests."""
