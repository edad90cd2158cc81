from freet_social.routes.auth.dependencies import get_session_username

__all__ = ["get_session_username"]
