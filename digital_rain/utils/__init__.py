"""Shared utilities for the digital rain host layer."""
