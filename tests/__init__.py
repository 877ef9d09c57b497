"""Test suite for pbnstudio."""
