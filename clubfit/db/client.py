"""
Supabase client factory.

The catalog and the recommendation cache are global (not per-user) tables,
so the backend talks to Supabase with a server-side key. There is no end-user
authentication in this service.
"""

import logging

from clubfit.config import settings
from clubfit.utils.errors import ServiceNotConfiguredError
from supabase import Client, create_client

logger = logging.getLogger(__name__)


def get_supabase_client() -> Client:
    """
    Create a Supabase client for the club catalog database.

    Returns:
        A Supabase client bound to SUPABASE_URL / SUPABASE_KEY.

    Raises:
        ServiceNotConfiguredError: If the database settings are missing.
            Callers normally check ``settings.missing_for`` first so this
            only fires for direct script usage.
    """
    missing = settings.missing_for("SUPABASE_URL", "SUPABASE_KEY")
    if missing:
        raise ServiceNotConfiguredError(missing)

    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_KEY
    )

    logger.debug("Created Supabase client for club catalog")

    return client
