"""Domain layer — secrets, front-matter, entries, collections, registry.

This layer depends on stdlib, pydantic, and ruamel.yaml. Storage is
reached only through the StorageAdapter contract; the local adapter
is imported lazily as the implicit backend for ``source = "fs"``.
"""
