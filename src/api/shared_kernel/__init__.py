"""Shared Kernel module.

Values every workshop context agrees on: the resolved TenantContext handed
to request handlers, and the ObservationContext bound to domain probes.
Resource contexts (vehicles, fleets, customers) depend on these, so
changes here must be coordinated across them.
"""
