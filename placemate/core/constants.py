"""Global constants for the placemate application."""

# Collection names
USERS = "users"
TEAMS = "teams"
TEAM_REQUESTS = "teamRequests"
USER_TEAMS = "userTeams"
FAVORITES = "favorites"
VISITS = "visits"
VISITED = "visited"
NOTIFICATIONS = "notifications"
PLACES = "places"
REPORTS = "reports"
BACKPACKS = "backpacks"
POSTS = "posts"

# Team request states
REQUEST_PENDING = "pending"
REQUEST_ACCEPTED = "accepted"
REQUEST_REJECTED = "rejected"

# Notification types
NOTIFICATION_COMMENT = "comment"
NOTIFICATION_TEAM_INVITE = "team_invite"
NOTIFICATION_TEAM_INVITE_ACCEPT = "team_invite_accept"
NOTIFICATION_TYPES = frozenset(
    {NOTIFICATION_COMMENT, NOTIFICATION_TEAM_INVITE, NOTIFICATION_TEAM_INVITE_ACCEPT}
)

# User roles and moderation
ROLE_ADMIN = "admin"
BAN_TYPE_ALL = "all"
BAN_TYPE_NONE = "none"
MS_PER_HOUR = 3600 * 1000

# Number of places returned by the newest-places listing
NEW_PLACES_LIMIT = 10

# Placeholder shown for senders whose profile no longer exists
UNKNOWN_USER_NAME = "Unknown"
