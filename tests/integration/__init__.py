"""Integration tests for the chat endpoint working as a whole.

Requests go through the real FastAPI app with real extraction backends;
only the completion gateway and its configuration are overridden.
"""
