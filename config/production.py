import os

from .config import clerk_config_from_env, db_config_from_env, env_flag, public_routes_from_env, stripe_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()
CLERK_CONFIG = clerk_config_from_env()
STRIPE_CONFIG = stripe_config_from_env()
PUBLIC_ROUTES = public_routes_from_env()

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = env_flag("LOG_JSON", "1")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
