"""Dependency injection container for the Wingzam application."""

from dependency_injector import containers, providers

from wingzam.catalog.catalog import BirdCatalog
from wingzam.catalog.matcher import NameMatcher
from wingzam.recordings.xeno_canto import XenoCantoClient
from wingzam.session.controller import SessionController
from wingzam.session.scheduler import AsyncioScheduler
from wingzam.system.path_resolver import PathResolver
from wingzam.transcription.google_speech import GoogleSpeechTranscriber
from wingzam.web.core.config import get_config


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    The catalog, matcher and API clients are process-wide singletons. Session
    controllers are created per connection or request, each owning its own state.
    """

    # Core infrastructure services - singletons
    path_resolver = providers.Singleton(PathResolver)

    # Configuration - singleton instance that uses our path_resolver
    config = providers.Singleton(
        get_config,
        path_resolver=path_resolver,
    )

    # Catalog path provider
    catalog_path = providers.Factory(
        lambda resolver: resolver.get_catalog_path(),
        resolver=path_resolver,
    )

    # Bird catalog - loaded once, immutable thereafter
    catalog = providers.Singleton(
        BirdCatalog.load,
        source=catalog_path,
    )

    name_matcher = providers.Singleton(
        NameMatcher,
        catalog=catalog,
    )

    # External API clients - singletons
    speech_transcriber = providers.Singleton(
        GoogleSpeechTranscriber,
        config=providers.Factory(lambda c: c.speech, c=config),
    )

    recordings_client = providers.Singleton(
        XenoCantoClient,
        config=providers.Factory(lambda c: c.recordings, c=config),
    )

    # Session controllers - one per session, never shared
    session_controller = providers.Factory(
        SessionController,
        matcher=name_matcher,
        scheduler=providers.Factory(AsyncioScheduler),
        stale_interim_seconds=providers.Factory(
            lambda c: c.session.stale_interim_seconds, c=config
        ),
        still_listening_seconds=providers.Factory(
            lambda c: c.session.still_listening_seconds, c=config
        ),
    )
