"""Governance configuration audit: team graph invariants and GitHub identity checks."""

__version__ = "1.0.0"
