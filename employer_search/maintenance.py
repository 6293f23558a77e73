"""Cache maintenance hooks for external schedulers.

Nothing in the library calls these automatically.  A host application may run
:func:`warmup_employer_cache` at startup so the first search is served from the
cache, and :func:`sweep_expired_cache` periodically to drop stale data.  Both
degrade gracefully: failures are logged and never raised.
"""

from __future__ import annotations

import logging
import time

from employer_search.services.employer_repository import EmployerRepositoryProtocol

logger = logging.getLogger(__name__)


async def warmup_employer_cache(repository: EmployerRepositoryProtocol) -> bool:
    """Prime the employer cache with an unfiltered search.

    Returns ``True`` when the search completed.  A source failure is logged at
    WARNING and reported as ``False`` so startup can continue.
    """

    try:
        start = time.time()
        employers = await repository.search("")
        elapsed = (time.time() - start) * 1000
        logger.info(f"✓ Employer cache warmed up with {len(employers)} employers ({elapsed:.0f}ms)")
        return True
    except Exception as e:
        logger.warning(f"Employer cache warmup failed: {e}")
        return False


async def sweep_expired_cache(repository: EmployerRepositoryProtocol) -> bool:
    """Clear the employer cache when it has expired.

    Returns ``True`` when an expired cache was cleared.
    """

    try:
        cleared = await repository.clear_expired_cache()
    except Exception as e:
        logger.warning(f"Employer cache sweep failed: {e}")
        return False

    if cleared:
        logger.info("Expired employer cache cleared")
    else:
        logger.debug("Employer cache still fresh; nothing to sweep")
    return cleared


__all__ = ["sweep_expired_cache", "warmup_employer_cache"]
