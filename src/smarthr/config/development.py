import os

from . import read_env, read_private_key

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

FIREBASE_CONFIG = {
    "project_id": read_env("FIREBASE_PROJECT_ID", read_env("NEXT_PUBLIC_FIREBASE_PROJECT_ID")),
    "client_email": read_env("FIREBASE_CLIENT_EMAIL"),
    "private_key": read_private_key(),
}

RAZORPAY_CONFIG = {
    "key_id": read_env("RAZORPAY_KEY_ID", read_env("NEXT_PUBLIC_RAZORPAY_KEY_ID")),
    "key_secret": read_env("RAZORPAY_KEY_SECRET"),
    "webhook_secret": read_env("RAZORPAY_WEBHOOK_SECRET"),
    "plan_id": read_env("RAZORPAY_PLAN_ID"),
}

DEBUG = True

SESSION_COOKIE_SECURE = bool(int(os.getenv("SESSION_COOKIE_SECURE", "0")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "0")))

# Client-side Firebase SDK settings for the login page.
FIREBASE_WEB_CONFIG = {
    "apiKey": read_env("FIREBASE_API_KEY", read_env("NEXT_PUBLIC_FIREBASE_API_KEY")),
    "authDomain": read_env("FIREBASE_AUTH_DOMAIN", read_env("NEXT_PUBLIC_FIREBASE_AUTH_DOMAIN")),
    "projectId": FIREBASE_CONFIG["project_id"],
}
