import os

from dotenv import load_dotenv

load_dotenv()

PORT = int(os.getenv("PORT", "5000"))
CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:3000")
FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS", "./firebase.json")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def use_in_memory_store() -> bool:
    """Read at app startup so tests can flip it with the environment"""
    return os.getenv("USE_IN_MEMORY_STORE", "").lower() in ("1", "true", "yes")
