"""ProductProvisioningSaga — create a product whose image lives outside
the database transaction.

Happy path::

    begin → find category → [upload image → persist image] →
    persist product → save changes → commit

The upload cannot be rolled back with the transaction. When any step
after a successful upload fails (including cancellation), the saga rolls
back and publishes one :class:`StoredImageDeletionRequested` for the
uploaded key; a consumer deletes the object. The saga never calls
``storage.delete`` itself and never retries a step. The original
exception is always re-raised unchanged after cleanup.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from riber_core.correlation import get_correlation_id
from riber_core.instrumentation import get_hook_registry
from riber_core.primitives.exceptions import HandlerError
from riber_core.tenancy import require_tenant_id

from ..domain.events import StoredImageDeletionRequested
from ..domain.image import Image
from ..domain.product import Product
from ..domain.specifications import ProductCategoryIdSpecification
from ..exceptions import CategoryNotFoundError
from .commands import CreateProductCommandValidator
from .state import ProvisioningState, ProvisioningStep

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from uuid import UUID

    from riber_core.ports.messaging import IEventPublisher
    from riber_core.ports.unit_of_work import UnitOfWork
    from riber_core.primitives.id_generator import IIDGenerator

    from ..ports.repository import ICatalogRepository
    from ..ports.storage import IImageStorage
    from .commands import CreateProductCommand

logger = logging.getLogger("riber.sagas.provisioning")


class ProductProvisioningSaga:
    """Runs one product creation inside one unit of work.

    Build a saga per invocation, like a request-scoped command handler:
    the unit of work (and the repository bound to it) is never shared
    between invocations, and a second :meth:`execute` on the same instance
    raises :class:`HandlerError`. After :meth:`execute` returns or
    raises, :attr:`state` tells where the flow ended.
    """

    def __init__(
        self,
        repository: ICatalogRepository,
        uow: UnitOfWork,
        storage: IImageStorage,
        publisher: IEventPublisher,
        *,
        tenant_provider: Callable[[], UUID] = require_tenant_id,
        validator: CreateProductCommandValidator | None = None,
        id_generator: IIDGenerator | None = None,
    ) -> None:
        self._repository = repository
        self._uow = uow
        self._storage = storage
        self._publisher = publisher
        self._tenant_provider = tenant_provider
        self._validator = validator or CreateProductCommandValidator()
        self._id_generator = id_generator
        self._state: ProvisioningState | None = None

    @property
    def state(self) -> ProvisioningState | None:
        return self._state

    # ── Entry point ──────────────────────────────────────────────

    async def execute(self, command: CreateProductCommand) -> Product:
        """Create the product described by *command*.

        Raises:
            ValidationError: The command is invalid; nothing was touched.
            CategoryNotFoundError: The category is not one of the tenant's.
            Exception: Any storage or persistence failure, re-raised as is.
        """
        if self._state is not None:
            raise HandlerError("ProductProvisioningSaga instances are single-use")
        state = self._state = ProvisioningState(command_id=command.command_id)

        (await self._validator.validate(command)).raise_if_invalid()
        tenant_id = self._tenant_provider()

        attributes: dict[str, Any] = {
            "command.id": command.command_id,
            "tenant.id": str(tenant_id),
            "correlation_id": command.correlation_id or get_correlation_id(),
        }

        try:
            product = await self._run(command, tenant_id, state, attributes)
        except (Exception, asyncio.CancelledError) as exc:
            await self._fail(state, exc, attributes)
            raise

        logger.info(
            "Provisioned product %s (category=%s, image=%s)",
            product.id,
            product.category_id,
            product.image_id,
        )
        return product

    # ── Steps ────────────────────────────────────────────────────

    async def _run(
        self,
        command: CreateProductCommand,
        tenant_id: UUID,
        state: ProvisioningState,
        attributes: dict[str, Any],
    ) -> Product:
        await self._uow.begin_transaction()

        category = await self._instrumented(
            "verify_category",
            attributes,
            lambda: self._repository.find_category(
                ProductCategoryIdSpecification(command.category_id), tenant_id
            ),
        )
        if category is None:
            raise CategoryNotFoundError(command.category_id)
        state.advance(ProvisioningStep.CATEGORY_VERIFIED, category_id=str(category.id))

        image: Image | None = None
        if command.image is not None:
            attachment = command.image
            image = Image.create(
                attachment.length,
                attachment.file_name,
                attachment.content_type,
                id_generator=self._id_generator,
            )
            await self._instrumented(
                "upload",
                attributes,
                lambda: self._storage.upload(
                    attachment.content, image.storage_key, attachment.content_type
                ),
            )
            state.record_upload(image.storage_key)
            logger.debug("Uploaded image %s for command %s", image.storage_key, command.command_id)

            await self._instrumented(
                "persist_image", attributes, lambda: self._repository.create_image(image)
            )
        state.advance(
            ProvisioningStep.ASSET_PERSISTED,
            image_id=str(image.id) if image is not None else None,
        )

        product = Product.create(
            command.name,
            command.description,
            command.price,
            category.id,
            tenant_id,
            image.id if image is not None else None,
            id_generator=self._id_generator,
        )

        async def _persist_product() -> None:
            await self._repository.create_product(product)
            await self._uow.save_changes()

        await self._instrumented("persist_product", attributes, _persist_product)
        state.advance(ProvisioningStep.AGGREGATE_PERSISTED, product_id=str(product.id))

        await self._instrumented("commit", attributes, self._uow.commit)
        state.advance(ProvisioningStep.COMMITTED)
        return product

    # ── Failure path ─────────────────────────────────────────────

    async def _fail(
        self,
        state: ProvisioningState,
        exc: BaseException,
        attributes: dict[str, Any],
    ) -> None:
        logger.warning(
            "Provisioning failed at %s for command %s: %s",
            state.step.value,
            state.command_id,
            exc,
        )
        try:
            await self._uow.rollback()
        except (Exception, asyncio.CancelledError):
            logger.exception("Rollback failed for command %s", state.command_id)
        if state.requires_compensation:
            await self._compensate(state, exc, attributes)
        state.fail(exc)

    async def _compensate(
        self,
        state: ProvisioningState,
        exc: BaseException,
        attributes: dict[str, Any],
    ) -> None:
        key = state.uploaded_key
        if key is None:
            return
        event = StoredImageDeletionRequested(
            key=key,
            reason=f"{type(exc).__name__} at {state.step.value}",
            aggregate_type="Image",
        )
        try:
            await self._instrumented(
                "compensate",
                {**attributes, "storage.key": key},
                lambda: self._publisher.publish(event),
            )
        except (Exception, asyncio.CancelledError):
            logger.exception(
                "Could not publish deletion of stored image %s; "
                "left for the reconciliation sweep",
                key,
            )
            return
        state.compensation_published = True
        logger.info("Requested deletion of stored image %s", key)

    @staticmethod
    async def _instrumented(
        step: str,
        attributes: dict[str, Any],
        fn: Callable[[], Awaitable[Any]],
    ) -> Any:
        return await get_hook_registry().execute_all(
            f"saga.provisioning.{step}", attributes, fn
        )
