"""Shared fakes for the wallet e2e tester tests."""
