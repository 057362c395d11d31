"""Tests - Sum-check engine test suite."""
