"""Composition function request handling."""
