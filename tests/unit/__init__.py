"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: File classification and per-backend extraction
    - llm/: Prompt assembly, gateway configuration and upstream handling
    - ui/: Chat and knowledge page state, chat endpoint client
"""
