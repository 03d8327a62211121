"""codegen-webhooks - Signed webhook receiver for the Codegen agent API"""
__version__ = "0.1.0"
