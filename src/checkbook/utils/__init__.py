"""Utility functions for checkbook."""
