"""Tests for text-level template editing."""
