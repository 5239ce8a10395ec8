"""Domain service: Inventory Ledger.

The ledger is the only writer of ``Product.stock``.  Each ``reserve`` is
an atomic read-check-write on one product: a lock keyed by product ID
serializes concurrent reservations of the same product so two checkouts
can never both see the last unit.  Reservations of different products
take different locks and proceed in parallel.

``reserve_all`` reserves several products for one checkout under a
``ReservationPolicy``:

* STRICT — validate every request first (no mutation), then reserve each
  product.  If another checkout takes the stock between validation and
  reservation, every reservation made so far is released and the error
  is raised.  Either all products are reserved or none is.
* LENIENT — reserve each product independently; a product without enough
  stock is skipped and the ones already reserved are kept.

Under both policies any other failure (a product deleted mid-checkout, a
stock write that could not be saved) releases this call's reservations
before the error propagates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import structlog

from storefront.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InsufficientStockError,
)
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.locks import KeyedLock

logger = structlog.get_logger(__name__)


class ReservationPolicy(Enum):
    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True)
class ReservationRequest:
    product_id: str
    quantity: int


@dataclass
class ReservationOutcome:
    reserved: list[ReservationRequest] = field(default_factory=list)
    skipped: list[InsufficientStockError] = field(default_factory=list)

    @property
    def skipped_product_names(self) -> list[str]:
        return [err.product_name for err in self.skipped]


class InventoryLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo
        self._locks = KeyedLock()

    # --- Single-product operations --------------------------------------------

    def available(self, product_id: str) -> int:
        return self._load(product_id).stock

    def reserve(self, product_id: str, quantity: int) -> int:
        """Atomically take ``quantity`` units of a product out of stock.

        Returns the new stock level after it has been persisted.  Raises
        InsufficientStockError, leaving stock unchanged, when fewer than
        ``quantity`` units are available.
        """
        with self._locks.hold(product_id):
            product = self._load(product_id)
            new_stock = product.decrement_stock(quantity)
            self._product_repo.update_stock(product_id, new_stock)

        logger.info(
            "Stock reserved",
            product_id=product_id,
            quantity=quantity,
            stock=new_stock,
        )
        return new_stock

    def release(self, product_id: str, quantity: int) -> int:
        """Return previously reserved units to stock."""
        with self._locks.hold(product_id):
            product = self._load(product_id)
            new_stock = product.increment_stock(quantity)
            self._product_repo.update_stock(product_id, new_stock)

        logger.info(
            "Stock released",
            product_id=product_id,
            quantity=quantity,
            stock=new_stock,
        )
        return new_stock

    # --- Multi-product reservation --------------------------------------------

    def reserve_all(
        self,
        requests: list[ReservationRequest],
        policy: ReservationPolicy = ReservationPolicy.STRICT,
    ) -> ReservationOutcome:
        requests = _merge(requests)
        if policy is ReservationPolicy.LENIENT:
            return self._reserve_lenient(requests)
        return self._reserve_strict(requests)

    def release_all(self, requests: list[ReservationRequest]) -> None:
        for request in requests:
            self.release(request.product_id, request.quantity)

    def _reserve_strict(self, requests: list[ReservationRequest]) -> ReservationOutcome:
        # Phase 1: validate against current stock, no mutation
        for request in requests:
            product = self._load(request.product_id)
            if request.quantity > product.stock:
                raise InsufficientStockError(
                    product_id=product.id,
                    product_name=product.name,
                    requested=request.quantity,
                    available=product.stock,
                )

        # Phase 2: reserve, undoing this call's reservations on any failure
        outcome = ReservationOutcome()
        for request in requests:
            try:
                self.reserve(request.product_id, request.quantity)
            except InsufficientStockError:
                logger.warning(
                    "Reservation lost to a concurrent checkout, rolling back",
                    product_id=request.product_id,
                    rolled_back=len(outcome.reserved),
                )
                self.release_all(outcome.reserved)
                raise
            except DomainException as exc:
                self._roll_back(outcome, request, exc)
                raise
            outcome.reserved.append(request)
        return outcome

    def _reserve_lenient(self, requests: list[ReservationRequest]) -> ReservationOutcome:
        outcome = ReservationOutcome()
        for request in requests:
            try:
                self.reserve(request.product_id, request.quantity)
            except InsufficientStockError as exc:
                logger.warning(
                    "Skipping reservation, insufficient stock",
                    product_id=exc.product_id,
                    requested=exc.requested,
                    available=exc.available,
                )
                outcome.skipped.append(exc)
                continue
            except DomainException as exc:
                self._roll_back(outcome, request, exc)
                raise
            outcome.reserved.append(request)
        return outcome

    def _roll_back(
        self,
        outcome: ReservationOutcome,
        failed: ReservationRequest,
        error: DomainException,
    ) -> None:
        logger.error(
            "Reservation failed, rolling back",
            product_id=failed.product_id,
            rolled_back=len(outcome.reserved),
            error=str(error),
        )
        self.release_all(outcome.reserved)
        outcome.reserved.clear()

    # --- Internal helpers -----------------------------------------------------

    def _load(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product


def _merge(requests: list[ReservationRequest]) -> list[ReservationRequest]:
    """Collapse requests for the same product, keeping first-seen order."""
    totals: dict[str, int] = {}
    for request in requests:
        totals[request.product_id] = totals.get(request.product_id, 0) + request.quantity
    return [ReservationRequest(pid, qty) for pid, qty in totals.items()]
