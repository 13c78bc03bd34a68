from app.core.config import Settings, get_settings
from app.services.suggestion_store import InMemorySuggestionStore, get_suggestion_store


def get_store() -> InMemorySuggestionStore:
    return get_suggestion_store()


def get_engine_settings() -> Settings:
    return get_settings()
