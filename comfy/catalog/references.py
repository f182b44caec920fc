"""Brand/category back-reference maintenance.

Keeps ``Brand.products`` and ``Category.products_id`` in step with the
brand and category each product is assigned to. Every list mutation
runs in its own session and commits on its own. A mutation that loses
a race with another writer on the same record is reapplied to the
current list. Other failures are logged without stopping the remaining
mutations or undoing the product write that triggered it.
"""

from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from comfy.catalog.repository import (
    BrandRepository,
    CategoryRepository,
    ReferenceListRepository,
)

logger = structlog.get_logger()

PUSH = "push"
PULL = "pull"

# Attempts per list mutation when concurrent writers hit the same record
CONFLICT_ATTEMPTS = 20


@dataclass(frozen=True)
class Assignment:
    """Brand and category a product is assigned to.

    Either side may be None in a proposed assignment, meaning the
    request did not touch that field.
    """

    brand_id: str | None
    category_id: str | None


class ReferenceMaintainer:
    """Applies product lifecycle changes to brand/category product lists.

    Example usage:
        maintainer = ReferenceMaintainer(async_session_factory)
        await maintainer.product_created(product.id, Assignment(brand, category))
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize maintainer.

        Args:
            session_factory: Factory for the sessions each mutation runs in.
        """
        self.session_factory = session_factory

    async def product_created(self, product_id: str, assignment: Assignment) -> None:
        """Add a new product to its brand and category lists.

        Args:
            product_id: ID of the created product.
            assignment: Brand and category of the product.
        """
        await self._mutate(BrandRepository, PUSH, assignment.brand_id, product_id)
        await self._mutate(CategoryRepository, PUSH, assignment.category_id, product_id)

    async def product_reassigned(
        self,
        product_id: str,
        previous: Assignment,
        proposed: Assignment,
    ) -> None:
        """Move a product between brand/category lists after an update.

        Ids are compared as opaque strings. A side that is None in the
        proposed assignment, or equal to the previous one, is left alone.

        Args:
            product_id: ID of the updated product.
            previous: Assignment stored before the update.
            proposed: Assignment requested by the update.
        """
        if proposed.brand_id is not None and proposed.brand_id != previous.brand_id:
            await self._mutate(BrandRepository, PULL, previous.brand_id, product_id)
            await self._mutate(BrandRepository, PUSH, proposed.brand_id, product_id)

        if (
            proposed.category_id is not None
            and proposed.category_id != previous.category_id
        ):
            await self._mutate(CategoryRepository, PULL, previous.category_id, product_id)
            await self._mutate(CategoryRepository, PUSH, proposed.category_id, product_id)

    async def product_deleted(self, product_id: str, assignment: Assignment) -> None:
        """Remove a deleted product from its brand and category lists.

        Args:
            product_id: ID of the deleted product.
            assignment: Brand and category the caller says it belonged to.
        """
        await self._mutate(BrandRepository, PULL, assignment.brand_id, product_id)
        await self._mutate(CategoryRepository, PULL, assignment.category_id, product_id)

    async def _mutate(
        self,
        repository_cls: type[ReferenceListRepository],
        action: str,
        owner_id: str | None,
        product_id: str,
    ) -> bool:
        """Run one push or pull in its own session.

        A version conflict with a concurrent writer rolls back and the
        mutation is reapplied to the current list, up to
        ``CONFLICT_ATTEMPTS`` times.

        Args:
            repository_cls: Brand or category repository class.
            action: PUSH or PULL.
            owner_id: Brand or category ID; None is skipped.
            product_id: Product ID to add or remove.

        Returns:
            True if a record was matched and the change committed.
        """
        if owner_id is None:
            return False

        log = logger.bind(
            owner=repository_cls.model.__tablename__,
            owner_id=owner_id,
            product_id=product_id,
            action=action,
        )

        for attempt in range(1, CONFLICT_ATTEMPTS + 1):
            try:
                async with self.session_factory() as session:
                    repository = repository_cls(session)
                    if action == PUSH:
                        matched = await repository.push_product(owner_id, product_id)
                    else:
                        matched = await repository.pull_product(owner_id, product_id)
                    await session.commit()
                break
            except StaleDataError:
                log.debug("Reference update conflict", attempt=attempt)
            except Exception:
                # Runs after the response is sent, so failures are only logged.
                log.exception("Reference update failed")
                return False
        else:
            log.error(
                "Reference update gave up after conflicts",
                attempts=CONFLICT_ATTEMPTS,
            )
            return False

        if not matched:
            log.warning("Reference owner not found")
            return False

        log.debug("Reference updated")
        return True
