import os
from urllib.parse import urlparse

from dotenv import load_dotenv

# Local dev reads .env; in containers the runtime injects the variables directly.
load_dotenv()


def _db_from_uri(uri: str) -> str:
    name = urlparse(uri).path.lstrip("/")
    return name or "anthropometric"


MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/anthropometric")
MONGO_DB = os.getenv("MONGO_DB") or _db_from_uri(MONGODB_URI)

JWT_SECRET = os.getenv("JWT_SECRET", "your-secret-key")
JWT_ALG = os.getenv("JWT_ALG", "HS256")
ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", "1"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5001"))
API_PREFIX = os.getenv("API_PREFIX", "/api")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
