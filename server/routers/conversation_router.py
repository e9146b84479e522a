# =============================================================================
# routers/conversation_router.py
# =============================================================================

import logging
from fastapi import APIRouter, Depends, WebSocket

from core.config import settings
from models.schemas import LanguageOption, LanguagesResponse
from services.conversation.connection import ConversationConnection
from services.translation.languages import INPUT_LANGUAGE_TAGS, LANGUAGE_NAMES, SUPPORTED_LANGUAGE_PAIRS
from services.translation.translator import TranslationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/conversation", tags=["Speech Translation"])

async def get_translation_service():
    """Per-connection translation service, closed when the socket ends"""
    service = TranslationService(settings)
    try:
        yield service
    finally:
        await service.aclose()

@router.get("/languages", response_model=LanguagesResponse)
async def list_languages():
    """Selectable recognition tags, output languages and remote-supported pairs"""
    return LanguagesResponse(
        input_languages=[LanguageOption(code=tag, name=name) for tag, name in INPUT_LANGUAGE_TAGS.items()],
        output_languages=[LanguageOption(code=code, name=name) for code, name in LANGUAGE_NAMES.items()],
        supported_pairs={source: sorted(targets) for source, targets in SUPPORTED_LANGUAGE_PAIRS.items()}
    )

@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket,
                             translation_service: TranslationService = Depends(get_translation_service)):
    """WebSocket endpoint driving one capture-to-translation pipeline"""
    connection = ConversationConnection(websocket, translation_service, settings)
    await connection.run()
