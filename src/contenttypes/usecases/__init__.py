"""
Application usecases.

CLI commands should call into these modules rather than touching repositories or
sessions directly.
"""

# Import order matters: type_import depends on content_type_service,
# which depends on content_service and media_service
from . import content_service  # noqa: I001
from . import media_service  # noqa: I001
from . import content_type_service  # noqa: I001
from . import type_import  # noqa: I001
