# =============================================================================
# models/schemas.py
# =============================================================================

from typing import Dict, List, Optional

from pydantic import BaseModel, validator

class ClientCapabilities(BaseModel):
    recognition: bool = False
    synthesis: bool = False
    clipboard: bool = False

    def names(self) -> List[str]:
        return [name for name in ("recognition", "synthesis", "clipboard") if getattr(self, name)]

class ClientHello(BaseModel):
    """First message on the conversation socket"""
    type: str
    capabilities: ClientCapabilities = ClientCapabilities()

    @validator("type")
    def validate_type(cls, v):
        if v != "hello":
            raise ValueError("First message must be a hello")
        return v

class RecognitionResultPayload(BaseModel):
    transcript: str = ""
    is_final: bool = False

class ClientMessage(BaseModel):
    """Intent or capability callback sent by the client"""
    type: str
    tag: Optional[str] = None
    code: Optional[str] = None
    signal: Optional[str] = None
    stream_id: Optional[str] = None
    results: List[RecognitionResultPayload] = []
    error: Optional[str] = None
    utterance_id: Optional[str] = None
    request_id: Optional[str] = None
    success: Optional[bool] = None

class LanguageOption(BaseModel):
    code: str
    name: str

class LanguagesResponse(BaseModel):
    input_languages: List[LanguageOption]
    output_languages: List[LanguageOption]
    supported_pairs: Dict[str, List[str]]
