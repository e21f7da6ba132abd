"""Test package for the Indian Tax Assistant.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP endpoint tests over the real app

The Anthropic client is replaced by a scripted fake (see conftest), so the
suite runs without an API key. Leverages pytest with pytest-check for soft
assertions.
"""
