"""Application bootstrap and lifecycle management."""

from typing import Protocol

import httpx

from .config import Settings
from .conversation import ConversationAgent
from .dispatch import IIntentDispatcher, IntentDispatcher
from .formatting import MessageFormatter
from .line import LineMessagingClient
from .llm import ILLMProvider, LLMProvider
from .logging_config import get_logger
from .places import (
    GoogleCustomSearchClient,
    GooglePlacesClient,
    HotelFinder,
    PlaceResolver,
    SearchEnricher,
)
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker
from .translation import GoogleTranslateClient, LanguageNormalizer
from .vision import GoogleVisionClient
from .webhook import EventHandler, IEventHandler

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Clear stored data."""
        ...

    @property
    def storage(self) -> IStorage:
        ...

    @property
    def handler(self) -> IEventHandler:
        ...


class Application:
    """Main application bootstrap."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings

        # Components (initialized in start())
        self._storage: IStorage | None = None
        self._tracker: ITracker | None = None
        self._http: httpx.AsyncClient | None = None
        self._llm: ILLMProvider | None = None
        self._dispatcher: IIntentDispatcher | None = None
        self._handler: IEventHandler | None = None

    async def start(self) -> None:
        """
        Initialize components in dependency order.

        Raises:
            ConfigError: if required environment variables are missing.
        """
        logger.info("Starting application")
        settings = self._settings or Settings.from_env()
        self._settings = settings

        # 1. Storage (no dependencies)
        self._storage = Storage(settings.db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Tracker (depends on Storage)
        self._tracker = Tracker(self._storage)

        # 3. Shared HTTP client and remote service clients
        self._http = httpx.AsyncClient(timeout=settings.http_timeout)
        self._llm = LLMProvider(api_key=settings.anthropic_api_key, model=settings.llm_model)
        places = GooglePlacesClient(self._http, settings.google_places_api_key)
        web_search = GoogleCustomSearchClient(
            self._http,
            settings.google_custom_search_api_key,
            settings.google_custom_search_engine_id,
        )
        translator = GoogleTranslateClient(self._http, settings.google_translate_api_key)
        vision = GoogleVisionClient(self._http, settings.google_vision_api_key)
        line = LineMessagingClient(self._http, settings.line_access_token)
        logger.info(f"Remote clients initialized (model: {settings.llm_model})")

        # 4. Domain components
        conversation = ConversationAgent(
            llm_provider=self._llm,
            storage=self._storage,
            tracker=self._tracker,
        )
        normalizer = LanguageNormalizer(translator)
        resolver = PlaceResolver(places)
        formatter = MessageFormatter(
            places_api_key=settings.google_places_api_key,
            trip_planner_url=settings.trip_planner_url,
        )

        # 5. IntentDispatcher (depends on all of the above)
        self._dispatcher = IntentDispatcher(
            conversation=conversation,
            normalizer=normalizer,
            resolver=resolver,
            hotels=HotelFinder(resolver, places),
            search=SearchEnricher(web_search),
            formatter=formatter,
            tracker=self._tracker,
        )

        # 6. EventHandler (depends on IntentDispatcher + transport)
        self._handler = EventHandler(
            dispatcher=self._dispatcher,
            conversation=conversation,
            line=line,
            vision=vision,
            normalizer=normalizer,
            formatter=formatter,
            tracker=self._tracker,
        )
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._http:
            await self._http.aclose()
            self._http = None
            logger.info("HTTP client closed")
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Clear chat histories and trace events."""
        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def dispatcher(self) -> IIntentDispatcher:
        """Get intent dispatcher instance."""
        if not self._dispatcher:
            raise RuntimeError("Application not started")
        return self._dispatcher

    @property
    def handler(self) -> IEventHandler:
        """Get event handler instance."""
        if not self._handler:
            raise RuntimeError("Application not started")
        return self._handler
