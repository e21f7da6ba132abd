"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with streaming support
    - File intake: encoding uploaded PDFs, images and text into turns
    - Emphasis of figures (amounts, percentages) in replies

Holds the conversation for the page session and sends it whole to the API.
"""
