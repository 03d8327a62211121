"""Utility modules for codegen-webhooks."""
