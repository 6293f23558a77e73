"""Employer search services split by responsibility.

* :mod:`.employer_cache` – expiring cache of the full employer collection.
* :mod:`.employer_source` – providers of the employer collection.
* :mod:`.employer_repository` – cache-first orchestration plus text matching.
* :mod:`.search_service` – discount threshold and sort ordering.
* :mod:`.favorites_service` – locally persisted favorites.
* :mod:`.search_session` – debounced, last-request-wins coordinator.
"""
