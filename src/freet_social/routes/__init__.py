from freet_social.routes.contact_information_display import router as contact_information_display_router
from freet_social.routes.followers import router as followers_router
from freet_social.routes.group_tagging import router as group_tagging_router

__all__ = ["contact_information_display_router", "followers_router", "group_tagging_router"]
