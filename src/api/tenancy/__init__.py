"""Tenancy bounded context.

Resolves which tenant (organization) a request operates against and
enforces per-tenant resource quotas for vehicles, fleets and customers.
"""
