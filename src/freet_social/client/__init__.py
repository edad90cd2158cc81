"""Client-side state and API access for Freet front ends."""

from freet_social.client.api_client import ApiError, FreetApiClient
from freet_social.client.state import Alert, AppState, sweep_alerts_periodically

__all__ = ["Alert", "ApiError", "AppState", "FreetApiClient", "sweep_alerts_periodically"]
