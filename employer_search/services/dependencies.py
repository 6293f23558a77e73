"""Factories wiring storage, cache, source and services from settings.

Separating construction from the service modules keeps the services free of
configuration concerns, so tests can build them directly with doubles.  Each
factory returns a new instance; :func:`employer_search.main.create_app` calls
them once and shares the results for the lifetime of the process.
"""

from __future__ import annotations

from employer_search.services.employer_cache import EmployerCacheManager
from employer_search.services.employer_repository import EmployerRepository
from employer_search.services.employer_source import (
    EmployerSourceProtocol,
    StaticEmployerSource,
)
from employer_search.services.favorites_service import FavoritesStore
from employer_search.services.search_service import SearchEmployersService
from employer_search.settings import AppSettings
from employer_search.storage import (
    EncryptedFileStorage,
    SecureStorage,
    StorageClient,
    load_or_create_key,
)


def get_secure_storage(settings: AppSettings) -> SecureStorage:
    """Provide the encrypted file storage configured by ``settings``."""

    key = settings.storage_encryption_key or load_or_create_key(settings.storage_key_path)
    return EncryptedFileStorage(settings.storage_dir, key)


def get_cache_manager(client: StorageClient, settings: AppSettings) -> EmployerCacheManager:
    return EmployerCacheManager(client, ttl_seconds=settings.cache_ttl_seconds)


def get_employer_source(settings: AppSettings) -> EmployerSourceProtocol:
    return StaticEmployerSource(latency_seconds=settings.source_latency_seconds)


def get_employer_repository(
    source: EmployerSourceProtocol, cache: EmployerCacheManager
) -> EmployerRepository:
    return EmployerRepository(source, cache)


def get_search_service(repository: EmployerRepository) -> SearchEmployersService:
    return SearchEmployersService(repository)


def get_favorites_store(client: StorageClient) -> FavoritesStore:
    return FavoritesStore(client)


__all__ = [
    "get_cache_manager",
    "get_employer_repository",
    "get_employer_source",
    "get_favorites_store",
    "get_search_service",
    "get_secure_storage",
]
