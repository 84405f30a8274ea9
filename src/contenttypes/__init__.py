"""Content type management: type definition CRUD, cascading deletes and DTD export."""

__version__ = "0.1.0"
