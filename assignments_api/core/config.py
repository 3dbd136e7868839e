import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR}/assignments.db")

# Seed users imported once at startup
USERS_CSV_PATH = os.getenv("USERS_CSV_PATH", "/opt/users.csv")

# Submission notifications (publishing is skipped when no topic is configured)
SNS_TOPIC_ARN = os.getenv("SNS_TOPIC_ARN")
AWS_REGION = os.getenv("AWS_REGION", os.getenv("AWS_DEFAULT_REGION", "us-east-1"))
AWS_ENDPOINT_URL = os.getenv("AWS_ENDPOINT_URL")  # e.g., http://localhost:4566 for LocalStack

# Health gate: max age of the cached status, 0 pings on every request
HEALTH_CHECK_TTL_SECONDS = float(os.getenv("HEALTH_CHECK_TTL_SECONDS", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "app.log")

PASSWORD_HASH_ROUNDS = int(os.getenv("PASSWORD_HASH_ROUNDS", "12"))
