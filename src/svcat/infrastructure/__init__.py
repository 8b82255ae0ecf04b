"""Infrastructure layer — the provisioning port and its kubectl adapter.

This layer depends on stdlib and the domain models it exchanges.
It must never import from services, commands, or output.
"""
