"""Mapping configuration, discovery and execution."""
