"""
Test support utilities for metaspine tests.

Helpers that are not pytest fixtures: scripted providers with injectable
listing and read faults.
"""
