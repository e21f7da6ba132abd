"""Unit tests for individual components in isolation.

Coverage:
    - models/: Content block validation and wire shape
    - agent/: Normalization, stream adaptation, configuration
    - ui/: File intake and message formatting
"""
