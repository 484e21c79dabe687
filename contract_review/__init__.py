"""Contract Review Chat - legal risk review of uploaded documents.

Extracts text from Word, Excel and image uploads, wraps it in a fixed
review instruction and asks a chat-completion model for an answer.

Components:
    - api: HTTP endpoint that runs the extraction and completion pipeline
    - llm: prompt assembly and the upstream chat-completion gateway
    - parsing: per-file text extraction (python-docx, openpyxl, Tesseract)
    - ui: NiceGUI chat and knowledge pages
    - models: Request/response schemas
"""

__version__ = "0.1.0"
