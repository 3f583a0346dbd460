"""PostgreSQL implementation of ITenantLimitsRepository.

Each method runs in its own short transaction taken from the write
sessionmaker. Bootstrapping relies on the unique constraint on
organization_id: ``create_if_absent`` inserts with ON CONFLICT DO NOTHING
and re-reads the existing row when the insert lost the race, so concurrent
first accesses never surface a conflict.
"""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.models import utc_now
from tenancy.domain.aggregates import LimitsUpdate, TenantLimits
from tenancy.domain.value_objects import TenantId, TenantLimitsId
from tenancy.infrastructure.errors import storage_errors
from tenancy.infrastructure.models import TenantLimitsModel
from tenancy.infrastructure.observability import (
    DefaultTenantLimitsRepositoryProbe,
    TenantLimitsRepositoryProbe,
)
from tenancy.ports.exceptions import TenantLimitsNotFoundError, UnknownTenantError
from tenancy.ports.repositories import ITenantLimitsRepository

TENANT_FK_CONSTRAINT = "organization_limits_organization_id_organization_id_fk"


class TenantLimitsRepository(ITenantLimitsRepository):
    """Repository managing PostgreSQL storage for TenantLimits records."""

    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        probe: TenantLimitsRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a write sessionmaker.

        Args:
            sessionmaker: Sessionmaker bound to the write engine
            probe: Optional domain probe for observability
        """
        self._sessionmaker = sessionmaker
        self._probe = probe or DefaultTenantLimitsRepositoryProbe()

    async def get_by_tenant(self, tenant_id: TenantId) -> TenantLimits | None:
        """Fetch a tenant's limits from PostgreSQL.

        Args:
            tenant_id: The tenant whose limits to read

        Returns:
            The TenantLimits record, or None if not created yet
        """
        stmt = select(TenantLimitsModel).where(
            TenantLimitsModel.organization_id == tenant_id.value
        )
        with storage_errors("get_limits", self._probe, tenant_id.value):
            async with self._sessionmaker() as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()

        if model is None:
            return None
        return self._to_domain(model)

    async def create_if_absent(self, limits: TenantLimits) -> TenantLimits:
        """Insert limits unless the tenant already has a row.

        Args:
            limits: Candidate record to insert

        Returns:
            The inserted record, or the existing one if another request won

        Raises:
            UnknownTenantError: If the organization does not exist
        """
        tenant_id = limits.tenant_id.value
        now = utc_now()
        stmt = (
            insert(TenantLimitsModel)
            .values(
                id=limits.id.value,
                organization_id=tenant_id,
                max_vehicles=limits.max_vehicles,
                max_fleets=limits.max_fleets,
                max_customers=limits.max_customers,
                max_monthly_invoices=limits.max_monthly_invoices,
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_nothing(index_elements=[TenantLimitsModel.organization_id])
            .returning(TenantLimitsModel)
        )

        with storage_errors("create_limits", self._probe, tenant_id):
            try:
                async with self._sessionmaker.begin() as session:
                    result = await session.execute(stmt)
                    model = result.scalar_one_or_none()

                    if model is None:
                        # Lost the race: the conflicting row is committed and visible
                        self._probe.limits_insert_conflicted(tenant_id)
                        reread = await session.execute(
                            select(TenantLimitsModel).where(
                                TenantLimitsModel.organization_id == tenant_id
                            )
                        )
                        model = reread.scalar_one()
                    else:
                        self._probe.limits_created(tenant_id)

                    stored = self._to_domain(model)
            except IntegrityError as e:
                if TENANT_FK_CONSTRAINT in str(e):
                    raise UnknownTenantError(tenant_id) from e
                raise

        return stored

    async def update(self, tenant_id: TenantId, limits_update: LimitsUpdate) -> TenantLimits:
        """Apply a partial update to a tenant's limits row.

        Only the supplied columns are written, plus updated_at.

        Args:
            tenant_id: The tenant whose limits to change
            limits_update: Fields to change

        Returns:
            The row after the update

        Raises:
            TenantLimitsNotFoundError: If the tenant has no row
        """
        provided = limits_update.provided()
        stmt = (
            update(TenantLimitsModel)
            .where(TenantLimitsModel.organization_id == tenant_id.value)
            .values(**provided, updated_at=utc_now())
            .returning(TenantLimitsModel)
            .execution_options(synchronize_session=False)
        )

        with storage_errors("update_limits", self._probe, tenant_id.value):
            async with self._sessionmaker.begin() as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()
                stored = None if model is None else self._to_domain(model)

        if stored is None:
            raise TenantLimitsNotFoundError(tenant_id.value)

        self._probe.limits_updated(tenant_id.value, fields=sorted(provided))
        return stored

    @staticmethod
    def _to_domain(model: TenantLimitsModel) -> TenantLimits:
        return TenantLimits(
            id=TenantLimitsId(value=model.id),
            tenant_id=TenantId(value=model.organization_id),
            max_vehicles=model.max_vehicles,
            max_fleets=model.max_fleets,
            max_customers=model.max_customers,
            max_monthly_invoices=model.max_monthly_invoices,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
