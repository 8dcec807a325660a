"""
Tests for the field resolution engine.
"""
