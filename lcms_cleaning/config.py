import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./lcms_cleaning.db")
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)
    logger.info("Converted postgres:// to postgresql:// in DATABASE_URL")

DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"

# The centre's local timezone, used to decide what "today" is
LOCAL_TIMEZONE = os.getenv("LOCAL_TIMEZONE", "Europe/London")

# Cognito user pool
AWS_REGION = os.getenv("AWS_REGION", "eu-west-2")
AWS_USER_POOL_ID = os.getenv("AWS_USER_POOL_ID", "")
AWS_USER_POOL_APP_CLIENT = os.getenv("AWS_USER_POOL_APP_CLIENT", "")
AWS_GET_STAFF_MEMBERS_ACCESS_KEY_ID = os.getenv("AWS_GET_STAFF_MEMBERS_ACCESS_KEY_ID")
AWS_GET_STAFF_MEMBERS_SECRET_ACCESS_KEY_ID = os.getenv("AWS_GET_STAFF_MEMBERS_SECRET_ACCESS_KEY_ID")

# Built single page client
CLIENT_DIR = os.getenv("CLIENT_DIR", "client")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE")

PORT = int(os.getenv("PORT", "3000"))
