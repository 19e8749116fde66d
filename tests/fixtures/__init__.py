"""Shared test fixtures for appendtree tests."""
