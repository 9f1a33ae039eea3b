"""Speech API

Speak requests return once playback or synthesis ends (or is superseded by
a newer request / a stop).
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

import content
from api.deps import get_speech
from core.errors import Err, not_found, raise_error
from engines.speech import PlaybackOutcome, SpeechOrchestrator, SpeechSource, SpeechSpeed, clip_path

router = APIRouter()


class SpeakItemRequest(BaseModel):
    hebrew_text: str | None = None
    speed: SpeechSpeed | None = None


class SpeakTextRequest(BaseModel):
    text: str
    speed: SpeechSpeed | None = None


class SpeedRequest(BaseModel):
    speed: SpeechSpeed


class OutcomeOut(BaseModel):
    item_id: str | None
    source: SpeechSource | None
    interrupted: bool

    @classmethod
    def from_outcome(cls, outcome: PlaybackOutcome) -> "OutcomeOut":
        return cls(item_id=outcome.item_id, source=outcome.source, interrupted=outcome.interrupted)


class SpeechStatus(BaseModel):
    is_speaking: bool
    default_speed: SpeechSpeed
    synthesis_available: bool


class ClipPath(BaseModel):
    item_id: str
    path: str


def _status(speech: SpeechOrchestrator) -> SpeechStatus:
    return SpeechStatus(
        is_speaking=speech.is_speaking,
        default_speed=speech.default_speed,
        synthesis_available=speech.synthesis_available,
    )


@router.post("/items/{item_id}", response_model=OutcomeOut)
async def speak_item(
    item_id: str,
    request: SpeakItemRequest | None = None,
    speech: SpeechOrchestrator = Depends(get_speech),
):
    """Play an item's clip, falling back to synthesis of its Hebrew text."""
    request = request or SpeakItemRequest()
    text = request.hebrew_text
    if text is None:
        item = content.speakable_item(item_id)
        if item is None:
            raise_error(not_found("Speakable item", item_id, origin="api.speech").error)
        text = item.hebrew

    result = await speech.speak_item(item_id, text, request.speed)
    if isinstance(result, Err):
        raise_error(result.error)
    return OutcomeOut.from_outcome(result.value)


@router.post("/speak", response_model=OutcomeOut)
async def speak_text(request: SpeakTextRequest, speech: SpeechOrchestrator = Depends(get_speech)):
    result = await speech.speak(request.text, request.speed)
    if isinstance(result, Err):
        raise_error(result.error)
    return OutcomeOut.from_outcome(result.value)


@router.post("/stop", response_model=SpeechStatus)
async def stop(speech: SpeechOrchestrator = Depends(get_speech)):
    speech.stop()
    return _status(speech)


@router.get("/status", response_model=SpeechStatus)
async def status(speech: SpeechOrchestrator = Depends(get_speech)):
    return _status(speech)


@router.put("/speed", response_model=SpeechStatus)
async def set_speed(request: SpeedRequest, speech: SpeechOrchestrator = Depends(get_speech)):
    speech.set_default_speed(request.speed)
    return _status(speech)


@router.get("/clips/{item_id}", response_model=ClipPath)
async def get_clip_path(item_id: str):
    return ClipPath(item_id=item_id, path=clip_path(item_id))
