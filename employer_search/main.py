"""Application bootstrap: logging, environment checks, and service wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from employer_search.services.dependencies import (
    get_cache_manager,
    get_employer_repository,
    get_employer_source,
    get_favorites_store,
    get_search_service,
    get_secure_storage,
)
from employer_search.services.employer_cache import EmployerCacheManager
from employer_search.services.employer_repository import EmployerRepository
from employer_search.services.employer_source import EmployerSourceProtocol
from employer_search.services.favorites_service import FavoritesStore
from employer_search.services.search_service import SearchEmployersService
from employer_search.services.search_session import SearchSession
from employer_search.settings import AppSettings, get_settings
from employer_search.storage import SecureStorage, StorageClient

logger = logging.getLogger(__name__)


def configure_logging(active_settings: AppSettings | None = None) -> None:
    """Configure root logging from settings."""

    resolved = active_settings or get_settings()
    logging.basicConfig(
        level=resolved.log_level_numeric,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _validate_environment(active_settings: AppSettings | None = None) -> None:
    """Log warnings for unset optional configuration."""

    resolved = active_settings or get_settings()
    warnings = resolved.optional_config_warnings()

    if warnings:
        logger.warning("=" * 80)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  - {warning}")
        logger.warning("=" * 80)


@dataclass(frozen=True)
class EmployerSearchApp:
    """Long-lived services shared by every search session in the process."""

    settings: AppSettings
    storage: SecureStorage
    cache_manager: EmployerCacheManager
    source: EmployerSourceProtocol
    repository: EmployerRepository
    search_service: SearchEmployersService
    favorites: FavoritesStore

    def new_session(self) -> SearchSession:
        """Create a started session; must be called from a running event loop."""

        session = SearchSession(
            self.search_service,
            self.favorites,
            debounce_seconds=self.settings.search_debounce_seconds,
        )
        session.start()
        return session


def create_app(
    active_settings: AppSettings | None = None,
    *,
    storage: SecureStorage | None = None,
    source: EmployerSourceProtocol | None = None,
) -> EmployerSearchApp:
    """Build the service graph once.

    ``storage`` and ``source`` may be supplied to swap the encrypted file store
    or the static employer dataset, e.g. in tests.
    """

    resolved = active_settings or get_settings()
    _validate_environment(active_settings=resolved)

    resolved_storage = storage if storage is not None else get_secure_storage(resolved)
    client = StorageClient(resolved_storage)
    cache_manager = get_cache_manager(client, resolved)
    resolved_source = source if source is not None else get_employer_source(resolved)
    repository = get_employer_repository(resolved_source, cache_manager)

    logger.info("Employer search services initialised")
    return EmployerSearchApp(
        settings=resolved,
        storage=resolved_storage,
        cache_manager=cache_manager,
        source=resolved_source,
        repository=repository,
        search_service=get_search_service(repository),
        favorites=get_favorites_store(client),
    )


__all__ = [
    "EmployerSearchApp",
    "configure_logging",
    "create_app",
]
