"""Codegen webhook verification and dispatch."""
