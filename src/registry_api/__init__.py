"""Barangay civil registry API with geographic, role-based access control."""

__version__ = "0.1.0"
