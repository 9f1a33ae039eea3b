"""User Preferences API"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.deps import get_preferences
from core.preferences import PreferencesStore, UserPreferences

router = APIRouter()


class PracticeModeRequest(BaseModel):
    value: bool


@router.get("", response_model=UserPreferences)
async def get_preferences_(store: PreferencesStore = Depends(get_preferences)):
    return store.current


@router.post("/toggle-keyboard", response_model=UserPreferences)
async def toggle_keyboard(store: PreferencesStore = Depends(get_preferences)):
    return store.toggle_keyboard()


@router.post("/toggle-practice-mode", response_model=UserPreferences)
async def toggle_practice_mode(store: PreferencesStore = Depends(get_preferences)):
    return store.toggle_practice_mode()


@router.put("/practice-mode", response_model=UserPreferences)
async def set_practice_mode(request: PracticeModeRequest, store: PreferencesStore = Depends(get_preferences)):
    return store.set_practice_mode(request.value)
