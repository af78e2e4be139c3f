import os
from dotenv import load_dotenv

load_dotenv()

ES_HOST = os.getenv("ES_HOST", "http://localhost:9200")
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

GAMMA_BASE_URL = os.getenv("GAMMA_BASE_URL", "https://gamma-api.polymarket.com")
GAMMA_TIMEOUT = int(os.getenv("GAMMA_TIMEOUT", "30"))

# Secrets: empty string means "not configured"
ADMIN_API_KEY = os.getenv("ADMIN_API_KEY", "")
CRON_SECRET = os.getenv("CRON_SECRET", "")
EMBED_SIGNING_SECRET = os.getenv("EMBED_SIGNING_SECRET", "")

ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()
]
