"""Shared test helpers for addonkit."""
