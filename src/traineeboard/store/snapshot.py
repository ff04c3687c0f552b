"""In-memory data store built on immutable snapshots.

The store holds a single DataSnapshot reference. Every mutation builds a
new snapshot from the current one, swaps the reference under a lock and
publishes the new snapshot to subscribers. Readers never see a partial
update, and collections handed out are tuples of frozen records.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from dataclasses import dataclass
from datetime import date
from typing import Callable

from traineeboard.models.domain import TestResult, Trainee
from traineeboard.query.filters import search_trainees

logger = logging.getLogger(__name__)

Subscriber = Callable[["DataSnapshot"], None]

# Trainee fields that update_trainee() may replace
TRAINEE_EDITABLE_FIELDS = frozenset({"name", "email", "address", "city", "country", "zip"})

# Editable fields that must always hold a value
TRAINEE_REQUIRED_FIELDS = frozenset({"name", "email"})


@dataclass(frozen=True)
class DataSnapshot:
    """Complete, immutable view of the store at one point in time."""

    subjects: tuple[str, ...] = ()
    trainees: tuple[Trainee, ...] = ()
    test_results: tuple[TestResult, ...] = ()


def _next_id(ids: list[int]) -> int:
    return max(ids) + 1 if ids else 1


class DataStore:
    """Holds the current snapshot and notifies subscribers of changes.

    Mutations are serialized by a lock; reads take the current reference
    without locking. Every swap gets a version number, and subscribers
    never receive a snapshot older than one already delivered.
    """

    def __init__(self, snapshot: DataSnapshot | None = None):
        """Initialize store.

        Args:
            snapshot: Initial contents. Defaults to an empty snapshot.
        """
        self._snapshot = snapshot if snapshot is not None else DataSnapshot()
        self._lock = threading.Lock()
        self._subscribers: list[Subscriber] = []
        self._version = 0
        # Reentrant so a subscriber may mutate the store while being notified
        self._publish_lock = threading.RLock()
        self._published_version = 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> DataSnapshot:
        return self._snapshot

    def get_subjects(self) -> tuple[str, ...]:
        return self._snapshot.subjects

    def get_trainees(self) -> tuple[Trainee, ...]:
        return self._snapshot.trainees

    def get_trainee(self, trainee_id: int) -> Trainee | None:
        """Get a trainee by id, or None if unknown."""
        for trainee in self._snapshot.trainees:
            if trainee.id == trainee_id:
                return trainee
        return None

    def get_test_results(self) -> tuple[TestResult, ...]:
        return self._snapshot.test_results

    def get_test_result(self, result_id: int) -> TestResult | None:
        """Get a test result by id, or None if unknown."""
        for result in self._snapshot.test_results:
            if result.id == result_id:
                return result
        return None

    def get_test_results_for_trainee(self, trainee_id: int) -> list[TestResult]:
        return [r for r in self._snapshot.test_results if r.trainee_id == trainee_id]

    def search_trainees(self, text: str) -> list[Trainee]:
        """Trainees whose name or email contains text."""
        return search_trainees(self._snapshot.trainees, text)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for snapshot changes.

        The callback is invoked immediately with the current snapshot and
        again after every mutation.

        Args:
            callback: Receives each published snapshot.

        Returns:
            Function that removes the subscription.
        """
        with self._publish_lock:
            with self._lock:
                self._subscribers.append(callback)
                current = self._snapshot
            self._notify(callback, current)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, callback: Subscriber, snapshot: DataSnapshot) -> None:
        try:
            callback(snapshot)
        except Exception:
            logger.exception("Snapshot subscriber %r failed", callback)

    def _swap(self, snapshot: DataSnapshot) -> int:
        # Caller holds self._lock
        self._snapshot = snapshot
        self._version += 1
        return self._version

    def _publish(self, snapshot: DataSnapshot, version: int) -> None:
        """Deliver a snapshot unless a newer one has already gone out.

        A newer publish that starts while this one is delivering (from
        another thread, or from a subscriber mutating the store) stops
        delivery of the older snapshot.
        """
        with self._publish_lock:
            if version < self._published_version:
                return
            self._published_version = version
            with self._lock:
                subscribers = list(self._subscribers)
            for callback in subscribers:
                if self._published_version > version:
                    return
                self._notify(callback, snapshot)

    def replace(self, snapshot: DataSnapshot) -> None:
        """Swap in a whole new snapshot and publish it."""
        with self._lock:
            version = self._swap(snapshot)
        self._publish(snapshot, version)

    # ------------------------------------------------------------------
    # Trainee mutations
    # ------------------------------------------------------------------

    def add_trainee(
        self,
        name: str,
        email: str,
        registration_date: date | None = None,
        address: str | None = None,
        city: str | None = None,
        country: str | None = None,
        zip: str | None = None,
    ) -> Trainee:
        """Enroll a new trainee.

        Returns:
            The created Trainee, with id one above the current maximum.
        """
        with self._lock:
            current = self._snapshot
            trainee = Trainee(
                id=_next_id([t.id for t in current.trainees]),
                name=name,
                email=email,
                registration_date=registration_date or date.today(),
                address=address,
                city=city,
                country=country,
                zip=zip,
            )
            new = dataclasses.replace(current, trainees=current.trainees + (trainee,))
            version = self._swap(new)

        logger.info("Added trainee %d (%s)", trainee.id, trainee.name)
        self._publish(new, version)
        return trainee

    def update_trainee(self, trainee_id: int, **changes: str | None) -> Trainee | None:
        """Replace contact/address fields of a trainee.

        None clears an optional address field. Existing test results keep
        the trainee name they were recorded with.

        Args:
            trainee_id: Trainee to update.
            **changes: Any of name, email, address, city, country, zip.

        Returns:
            Updated Trainee, or None if trainee_id is unknown.

        Raises:
            ValueError: If a field outside TRAINEE_EDITABLE_FIELDS is given,
                or name or email is None.
        """
        unknown = set(changes) - TRAINEE_EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update trainee fields: {sorted(unknown)}")
        missing = sorted(k for k in TRAINEE_REQUIRED_FIELDS if k in changes and changes[k] is None)
        if missing:
            raise ValueError(f"Trainee fields cannot be cleared: {missing}")

        with self._lock:
            current = self._snapshot
            trainees = list(current.trainees)
            for index, trainee in enumerate(trainees):
                if trainee.id == trainee_id:
                    break
            else:
                return None

            updated = dataclasses.replace(trainee, **changes)
            trainees[index] = updated
            new = dataclasses.replace(current, trainees=tuple(trainees))
            version = self._swap(new)

        logger.info("Updated trainee %d", trainee_id)
        self._publish(new, version)
        return updated

    def remove_trainee(self, trainee_id: int) -> bool:
        """Remove a trainee together with all of their test results.

        Returns:
            True if the trainee existed.
        """
        with self._lock:
            current = self._snapshot
            trainees = tuple(t for t in current.trainees if t.id != trainee_id)
            if len(trainees) == len(current.trainees):
                return False
            results = tuple(r for r in current.test_results if r.trainee_id != trainee_id)
            new = dataclasses.replace(current, trainees=trainees, test_results=results)
            version = self._swap(new)

        logger.info(
            "Removed trainee %d and %d test results",
            trainee_id,
            len(current.test_results) - len(results),
        )
        self._publish(new, version)
        return True

    # ------------------------------------------------------------------
    # Test result mutations
    # ------------------------------------------------------------------

    def add_test_result(
        self,
        trainee_id: int,
        subject: str,
        grade: float,
        test_date: date | None = None,
        trainee_name: str | None = None,
    ) -> TestResult:
        """Record a test result.

        trainee_name is copied from the referenced trainee. The given
        trainee_name is only used when trainee_id matches no trainee.

        Returns:
            The created TestResult.
        """
        with self._lock:
            current = self._snapshot
            trainee = next((t for t in current.trainees if t.id == trainee_id), None)
            if trainee is None:
                logger.warning("Recording test result for unknown trainee %d", trainee_id)

            result = TestResult(
                id=_next_id([r.id for r in current.test_results]),
                trainee_id=trainee_id,
                trainee_name=trainee.name if trainee else (trainee_name or ""),
                subject=subject,
                grade=grade,
                test_date=test_date or date.today(),
            )
            new = dataclasses.replace(current, test_results=current.test_results + (result,))
            version = self._swap(new)

        logger.info("Added test result %d for trainee %d", result.id, trainee_id)
        self._publish(new, version)
        return result

    def update_test_result(
        self,
        result_id: int,
        subject: str | None = None,
        grade: float | None = None,
        test_date: date | None = None,
    ) -> TestResult | None:
        """Replace subject, grade and/or date of a test result.

        id, trainee_id and trainee_name are never changed.

        Returns:
            Updated TestResult, or None if result_id is unknown.
        """
        updates: dict[str, object] = {}
        if subject is not None:
            updates["subject"] = subject
        if grade is not None:
            updates["grade"] = grade
        if test_date is not None:
            updates["test_date"] = test_date

        with self._lock:
            current = self._snapshot
            results = list(current.test_results)
            for index, result in enumerate(results):
                if result.id == result_id:
                    break
            else:
                return None

            updated = dataclasses.replace(result, **updates)
            results[index] = updated
            new = dataclasses.replace(current, test_results=tuple(results))
            version = self._swap(new)

        logger.info("Updated test result %d", result_id)
        self._publish(new, version)
        return updated

    def remove_test_result(self, result_id: int) -> bool:
        """Remove a single test result.

        Returns:
            True if the result existed.
        """
        with self._lock:
            current = self._snapshot
            results = tuple(r for r in current.test_results if r.id != result_id)
            if len(results) == len(current.test_results):
                return False
            new = dataclasses.replace(current, test_results=results)
            version = self._swap(new)

        logger.info("Removed test result %d", result_id)
        self._publish(new, version)
        return True
