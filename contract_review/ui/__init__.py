"""NiceGUI interface - thin visualization layer over the chat endpoint.

Responsibilities:
    - Chat thread with attachments, loading state and debug panels
    - Knowledge notes page (in-memory only)

Page state lives in ``state``; the pages only render it and call the API.
"""
