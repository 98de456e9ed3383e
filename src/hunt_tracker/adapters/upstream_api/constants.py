"""Upstream provider endpoint paths."""

AUTH_PATH = "/auth/v1/token"
LOCATION_REQUEST_PATH = "/rest/v1/rpc/location-request"
LOCATIONS_PATH = "/rest/v1/rpc/get_user_locations_for_game_minimal_v2"

DASHBOARD_PATH = "/games/{game_id}/dashboard"
PLAYERS_PATH = "/games/{game_id}/players"
PLAYER_DETAIL_PATH = "/games/{game_id}/players/{participant_id}"

PLAYERS_PAGE_PARAMS = {"filter": "all", "sort": "alphabetical", "group": "team"}
LOCATION_REQUEST_QUEUE = "location-request"
