from .config import db_config_from_env, public_routes_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env()
CLERK_CONFIG = {
    "secret_key": "sk_test_dummy",
    "issuer": "https://clerk.test.local",
    "jwks_url": "",
    "jwt_key": "",
    "api_url": "https://api.clerk.test.local/v1",
}
STRIPE_CONFIG = {"secret_key": "", "webhook_secret": ""}
PUBLIC_ROUTES = public_routes_from_env()

DEBUG = False
TESTING = True
LOG_LEVEL = "DEBUG"
LOG_JSON = False

AUTO_INIT_DB = False
