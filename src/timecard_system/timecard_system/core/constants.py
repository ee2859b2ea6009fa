"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SESSION_COOKIE_NAME = "__session"
SUBSCRIPTION_METADATA_KEY = "subscription"
STRIPE_CUSTOMER_ID_KEY = "stripeCustomerId"

# Scheduled days are stored at 06:00 UTC of the chosen date.
DAY_SCHEDULED_UTC_HOUR = 6

EMPLOYEE_ID_PREFIX = "EMP"
EMPLOYEE_ID_SUFFIX_LENGTH = 5

IDENTITY_HTTP_TIMEOUT_SECONDS = 10.0

DEFAULT_PUBLIC_ROUTES = (
    "/",
    "/health",
    "/api/uploadthing",
    "/blog(.*)",
    "/skill-tree(.*)",
    "/api/webhooks(.*)",
    "/api/get-work-time",
    "/api/stripe/get-price",
)
