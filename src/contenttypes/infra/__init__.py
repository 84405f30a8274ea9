"""
Infrastructure layer - database, unit of work, repositories, logging, settings.

This layer contains technical concerns: the SQLAlchemy engine and session factory,
the Unit of Work boundary, the type definition repositories, structlog
configuration and Pydantic settings.
"""
