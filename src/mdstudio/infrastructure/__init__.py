"""Infrastructure layer — storage adapters and the remote API client.

This layer depends on stdlib, httpx, and the domain error/secret types.
It must never import from services, commands, or output.
"""
