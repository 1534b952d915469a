"""Global dependencies for the application."""

from collections.abc import AsyncGenerator
from functools import lru_cache

import httpx
from fastapi import Depends, Request
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_async_session
from app.core.exceptions import AuthenticationError
from app.providers.registry import ProviderRegistry
from app.repositories.chat_repo import ChatRepository
from app.services.chat_service import ChatService
from app.services.image_service import ImageLookupService


@lru_cache
def get_provider_registry() -> ProviderRegistry:
    """Get the provider registry built from configuration."""
    return ProviderRegistry.from_config(settings.providers)


class CurrentUser(BaseModel):
    """Authenticated user extracted from request state."""

    model_config = ConfigDict(frozen=True)

    id: str


def get_current_user(request: Request) -> CurrentUser:
    """Extract the authenticated user from middleware-populated state."""
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        raise AuthenticationError(message="Not authenticated")
    return CurrentUser(id=user_id)


def get_chat_repository(
    session: AsyncSession = Depends(get_async_session),
) -> ChatRepository:
    """Get ChatRepository bound to the current session."""
    return ChatRepository(session)


def get_chat_service(
    chat_repo: ChatRepository = Depends(get_chat_repository),
    current_user: CurrentUser = Depends(get_current_user),
    providers: ProviderRegistry = Depends(get_provider_registry),
) -> ChatService:
    """Get ChatService for the authenticated user."""
    return ChatService(chat_repo=chat_repo, user_id=current_user.id, providers=providers)


async def get_image_service() -> AsyncGenerator[ImageLookupService, None]:
    """Get ImageLookupService with a request-scoped HTTP client."""
    config = settings.image_search
    async with httpx.AsyncClient(timeout=config.timeout_seconds) as client:
        yield ImageLookupService(client, config)
