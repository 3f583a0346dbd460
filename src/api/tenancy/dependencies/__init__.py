"""FastAPI dependencies for the Tenancy bounded context.

Composes infrastructure resources (sessionmakers, settings) with
Tenancy-specific components (repositories, services), one module per
concern.
"""
