"""Test doubles for external tools."""
