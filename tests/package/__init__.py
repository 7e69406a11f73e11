"""Tests for DOCX package access."""
