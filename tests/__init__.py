"""Test package for Contract Review Chat.

Structure:
    - unit/: Extraction, prompt assembly, gateway, page state and client
    - integration/: The chat endpoint through the ASGI app

The upstream completion API is never called; it is stubbed at the gateway
or with an httpx mock transport. Sample Word, Excel and image files are
built in memory.
"""
