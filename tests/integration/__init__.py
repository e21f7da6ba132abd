"""Integration tests for components working together as a system.

Exercises the FastAPI app, normalizer and streaming adapter end to end over
httpx ASGITransport, with only the model backend client faked.
"""
