"""Centralized FastAPI dependency type aliases.

Import these ``*Dep`` aliases in route modules instead of writing
``Annotated[T, Depends(get_xxx)]`` everywhere.  Each alias maps to a
single ``get_*`` factory that tests can override via
``app.dependency_overrides[get_xxx] = ...``.
"""

from typing import Annotated

from fastapi import Depends

from bearingbot.configs.config import AppConfig, get_app_config, get_chat_config
from bearingbot.configs.system import ChatConfig
from bearingbot.core.catalog import CatalogStore, get_catalog
from bearingbot.core.conversation import ConversationManager
from bearingbot.core.deps import get_conversation_manager

AppConfigDep = Annotated[AppConfig, Depends(get_app_config)]
ChatConfigDep = Annotated[ChatConfig, Depends(get_chat_config)]
CatalogDep = Annotated[CatalogStore, Depends(get_catalog)]
ConversationManagerDep = Annotated[
    ConversationManager, Depends(get_conversation_manager)
]
