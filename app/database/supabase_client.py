from supabase import create_client, Client
from app.config.settings import settings


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def _check_configured(cls):
        if not settings.supabase_url or not settings.supabase_key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be configured")

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._check_configured()
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Profile queries filter on owner_id themselves."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._check_configured()
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def get_user_client(cls, token: str) -> Client:
        """
        New anon-key client that acts as the caller, so RLS sees auth.uid().
        Never cached: the shared clients must not carry a caller's JWT.
        """
        cls._check_configured()
        client = create_client(settings.supabase_url, settings.supabase_key)
        # postgrest and storage read these headers when first built
        client.options.headers["Authorization"] = f"Bearer {token}"
        client.postgrest.auth(token)
        return client

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_request_supabase(token: str = None) -> Client:
    """
    Client for profile and resume calls made on behalf of a caller.

    With a service_role key the shared service client is used and the
    service layer enforces ownership. Without one, the caller's JWT is
    attached so the table and bucket policies apply.
    """
    if settings.supabase_service_role_key or not token:
        return SupabaseClient.get_service_client()
    return SupabaseClient.get_user_client(token)
