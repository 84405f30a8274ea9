"""
Domain layer - entities and collaborator interfaces.

This layer contains the type definition entities, the content/media instances
that depend on them, and the interfaces of the services a type deletion
cascades into.
"""
