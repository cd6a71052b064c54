"""
Description:
Environment-driven settings for the oracle clients and the web layer.

Dependencies:
- dotenv: For environment variable loading.
- os: For environment variable access.
"""
import os
from dotenv import load_dotenv

load_dotenv()

ORACLE_API_KEY = os.getenv("ORACLE_API_KEY")
ORACLE_BASE_URL = os.getenv("ORACLE_BASE_URL", "https://api.openai.com/v1")
ORACLE_MODEL = os.getenv("ORACLE_MODEL", "gpt-4o-mini")
# Oracle calls have unbounded latency; every call is cut off after this many seconds
ORACLE_TIMEOUT_SECONDS = float(os.getenv("ORACLE_TIMEOUT_SECONDS", "30"))

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if origin.strip()]

ENV = os.getenv("ENV", "development")
