import json
import os
from dotenv import load_dotenv

load_dotenv()

# API Keys and Config - loaded from .env
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

# Models
COPY_PROVIDER = os.getenv("COPY_PROVIDER", "gemini")  # "gemini" or "openai"
COPY_MODEL = os.getenv("COPY_MODEL", "gemini-2.5-flash")
OPENAI_COPY_MODEL = os.getenv("OPENAI_COPY_MODEL", "gpt-4.1")
IMAGE_MODEL = os.getenv("IMAGE_MODEL", "imagen-4.0-generate-001")
EDIT_MODEL = os.getenv("EDIT_MODEL", "gemini-2.5-flash-image-preview")

BRAND_NAME = os.getenv("BRAND_NAME", "MegaTech Solutions")

# History (library) storage
HISTORY_BACKEND = os.getenv("HISTORY_BACKEND", "local")  # "memory", "local" or "s3"
HISTORY_DIR = os.getenv("HISTORY_DIR", ".creative_history")
HISTORY_S3_BUCKET = os.getenv("HISTORY_S3_BUCKET")
HISTORY_S3_PREFIX = os.getenv("HISTORY_S3_PREFIX", "history")

# Employee credentials - JSON object {"email": "password"} or a JSON file path
EMPLOYEE_CREDENTIALS = os.getenv("EMPLOYEE_CREDENTIALS", "{}")
CREDENTIALS_FILE = os.getenv("CREDENTIALS_FILE")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def load_credentials() -> dict[str, str]:
    """Load the employee credential map from CREDENTIALS_FILE or EMPLOYEE_CREDENTIALS."""
    if CREDENTIALS_FILE:
        with open(CREDENTIALS_FILE, encoding="utf-8") as f:
            return json.load(f)
    return json.loads(EMPLOYEE_CREDENTIALS or "{}")
