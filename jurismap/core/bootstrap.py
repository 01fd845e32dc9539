"""Wiring of provider, store, refresher and service."""
from dataclasses import dataclass
from typing import Optional

from jurismap.core.boundary_store import BoundaryRefresher, BoundaryStore
from jurismap.core.config import BOUNDARY_REFRESH_SECONDS
from jurismap.core.models import LoadReport
from jurismap.core.service import JurisdictionService
from jurismap.providers.base import BoundaryProvider
from jurismap.providers.factory import provider_from_config


@dataclass
class Runtime:
    """Everything a caller needs to resolve points; owned by that caller."""
    store: BoundaryStore
    service: JurisdictionService
    provider: BoundaryProvider
    load_report: LoadReport
    refresher: Optional[BoundaryRefresher] = None

    def close(self):
        if self.refresher is not None:
            self.refresher.stop()
        close = getattr(self.provider, "close", None)
        if close is not None:
            close()


def build_runtime(
    provider: Optional[BoundaryProvider] = None,
    refresh_seconds: float = BOUNDARY_REFRESH_SECONDS
) -> Runtime:
    """
    Load boundaries and build a ready-to-query service.

    Args:
        provider: Boundary source; chosen from configuration when omitted
        refresh_seconds: Background reload interval, 0 disables refreshing
    """
    provider = provider or provider_from_config()
    store = BoundaryStore()
    report = store.load(provider)

    refresher = None
    if refresh_seconds and refresh_seconds > 0:
        refresher = BoundaryRefresher(store, provider, refresh_seconds)
        refresher.start()

    return Runtime(
        store=store,
        service=JurisdictionService(store),
        provider=provider,
        load_report=report,
        refresher=refresher,
    )
