"""Shared helpers for the identity package."""
