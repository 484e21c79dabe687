"""FastAPI endpoints for contract review chat.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Extract attachments, assemble prompt, ask the model
"""

from contract_review.api.app import app, create_app

__all__ = ["app", "create_app"]
