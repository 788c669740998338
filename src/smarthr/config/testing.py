SECRET_KEY = "test-secret"

FIREBASE_CONFIG = {
    "project_id": "smarthr-test",
    "client_email": "",
    "private_key": "",
}

RAZORPAY_CONFIG = {
    "key_id": "rzp_test_key",
    "key_secret": "rzp_test_secret",
    "webhook_secret": "whsec_test",
    "plan_id": "plan_test",
}

DEBUG = False
TESTING = True

SESSION_COOKIE_SECURE = False

LOG_LEVEL = "WARNING"
LOG_JSON = False

FIREBASE_WEB_CONFIG = {"apiKey": "test", "authDomain": "smarthr-test.firebaseapp.com", "projectId": "smarthr-test"}
