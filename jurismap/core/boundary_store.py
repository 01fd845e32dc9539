"""Owned, swappable store of validated boundary records and their index."""
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Tuple

from jurismap.core.boundaries import build_boundary
from jurismap.core.config import INDEX_NODE_CAPACITY
from jurismap.core.errors import MalformedPolygon
from jurismap.core.models import BoundaryPolygon, LoadReport
from jurismap.core.spatial_index import SpatialIndex
from jurismap.providers.base import BoundaryProvider
from jurismap.utils.error_tracking import capture_message
from jurismap.utils.logging import log_error, log_structured, log_warning


@dataclass(frozen=True)
class StoreSnapshot:
    """Immutable pairing of a record set with the index built over it."""
    records: Tuple[BoundaryPolygon, ...]
    index: SpatialIndex
    source: str
    generation: int
    loaded_at: Optional[datetime] = None
    by_id: Dict[str, BoundaryPolygon] = field(default_factory=dict, compare=False)

    @classmethod
    def empty(cls) -> "StoreSnapshot":
        return cls(records=(), index=SpatialIndex(()), source="empty", generation=0)


class BoundaryStore:
    """
    Holds the current boundary snapshot.

    Readers take ``store.snapshot`` once per query and work against it without
    locking. ``load`` builds a complete new snapshot off to the side and
    publishes it with a single attribute assignment, so in-flight queries keep
    the snapshot they started with. Writers are serialized by a lock.
    """

    def __init__(self, node_capacity: int = INDEX_NODE_CAPACITY):
        """
        Initialize an empty store.

        Args:
            node_capacity: R-tree node capacity for every index built by this store
        """
        self.node_capacity = node_capacity
        self._write_lock = threading.Lock()
        self._snapshot = StoreSnapshot.empty()

    @property
    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    @property
    def records(self) -> Tuple[BoundaryPolygon, ...]:
        return self._snapshot.records

    @property
    def index(self) -> SpatialIndex:
        return self._snapshot.index

    def get(self, record_id: str) -> Optional[BoundaryPolygon]:
        return self._snapshot.by_id.get(record_id)

    def __len__(self) -> int:
        return len(self._snapshot.records)

    def load(self, provider: BoundaryProvider) -> LoadReport:
        """
        Fetch records from a provider and publish a new snapshot.

        Provider errors propagate and leave the current snapshot in place.

        Args:
            provider: Boundary data source

        Returns:
            LoadReport with loaded and rejected counts
        """
        raw_records = provider.fetch_records()
        return self.load_records(
            raw_records,
            source=provider.get_name(),
            coordinate_order=provider.coordinate_order,
        )

    reload = load

    def load_records(
        self,
        raw_records: Iterable[Dict[str, Any]],
        source: str = "records",
        coordinate_order: str = "lonlat"
    ) -> LoadReport:
        """
        Validate raw records and publish them as the new snapshot.

        Malformed records are excluded and reported; they never reach the index.

        Args:
            raw_records: Raw boundary records
            source: Name of the data source, for reporting
            coordinate_order: Axis order of the raw vertices

        Returns:
            LoadReport
        """
        start = time.perf_counter()
        report = LoadReport(source=source)

        with self._write_lock:
            polygons = []
            by_id: Dict[str, BoundaryPolygon] = {}
            for position, raw in enumerate(raw_records):
                try:
                    polygon = build_boundary(raw, coordinate_order=coordinate_order)
                    if polygon.id in by_id:
                        raise MalformedPolygon("Duplicate record id", polygon.id)
                except MalformedPolygon as e:
                    self._report_rejection(report, e, raw, position)
                    continue
                by_id[polygon.id] = polygon
                polygons.append(polygon)

            snapshot = StoreSnapshot(
                records=tuple(polygons),
                index=SpatialIndex(polygons, node_capacity=self.node_capacity),
                source=source,
                generation=self._snapshot.generation + 1,
                loaded_at=datetime.now(timezone.utc),
                by_id=by_id,
            )
            self._snapshot = snapshot

        report.loaded = len(polygons)
        report.elapsed_seconds = time.perf_counter() - start
        log_structured(
            "info",
            "Boundary snapshot published",
            source=source,
            generation=snapshot.generation,
            loaded=report.loaded,
            rejected=len(report.rejected),
            elapsed_seconds=report.elapsed_seconds,
        )
        return report

    @staticmethod
    def _report_rejection(report: LoadReport, error: MalformedPolygon, raw: Dict[str, Any], position: int):
        record_id = error.record_id or raw.get("id")
        report.rejected.append({
            "id": record_id,
            "position": position,
            "reason": str(error),
        })
        log_warning(
            "Malformed boundary excluded",
            source=report.source,
            record_id=record_id,
            position=position,
            reason=str(error),
        )
        capture_message(
            f"Malformed boundary excluded: {error}",
            level="warning",
            context={"source": report.source, "record_id": record_id},
        )


class BoundaryRefresher:
    """
    Reloads a store from its provider on a fixed schedule.

    A failed refresh keeps the previous snapshot serving queries.
    """

    def __init__(self, store: BoundaryStore, provider: BoundaryProvider, interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.store = store
        self.provider = provider
        self.interval_seconds = interval_seconds
        self.last_report: Optional[LoadReport] = None
        self.failures = 0
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def refresh_once(self) -> Optional[LoadReport]:
        """Run one reload; returns None when it failed."""
        try:
            report = self.store.reload(self.provider)
        except Exception as e:
            self.failures += 1
            log_error(e, {
                "module": "boundary_store",
                "function": "BoundaryRefresher.refresh_once",
                "provider": self.provider.get_name(),
                "serving_generation": self.store.snapshot.generation,
            })
            return None
        self.last_report = report
        return report

    def start(self):
        """Start the background refresh thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="boundary-refresher", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = None):
        """Signal the thread to stop and wait for it."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self):
        while not self._stop.wait(self.interval_seconds):
            self.refresh_once()
