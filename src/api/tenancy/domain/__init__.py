"""Domain layer for the Tenancy bounded context.

Pure value objects, outcomes and the TenantLimits aggregate. No framework
or database dependencies.
"""
