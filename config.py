import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    STEAM_API_KEY = os.getenv("STEAM_API_KEY")
    PROXY = os.getenv("PROXY")  # "http://user:pass@ip:port"

    # Intermediary bot account
    BOT_ID = os.getenv("BOT_ID", "market")
    BOT_USERNAME = os.getenv("BOT_USERNAME")
    BOT_PASSWORD = os.getenv("BOT_PASSWORD")
    BOT_MA_FILE = os.getenv("BOT_MA_FILE")

    INVENTORY_APP_ID = int(os.getenv("INVENTORY_APP_ID", "570"))
    INVENTORY_CONTEXT_ID = int(os.getenv("INVENTORY_CONTEXT_ID", "2"))
    INVENTORY_TIMEOUT = float(os.getenv("INVENTORY_TIMEOUT", "15"))
    STEAM_IMAGE_CDN = os.getenv("STEAM_IMAGE_CDN", "https://steamcommunity-a.akamaihd.net/economy/image/")

    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DB = os.getenv("MONGO_DB", "market")
    MONGO_USERS = os.getenv("MONGO_USERS", "users")
    MONGO_OFFERS = os.getenv("MONGO_OFFERS", "offers")
    MONGO_SESSIONS = os.getenv("MONGO_SESSIONS", "sessions")

    TOKEN_SECRET_KEY = os.getenv("TOKEN_SECRET_KEY", "change-me")
    TOKEN_ALGORITHM = os.getenv("TOKEN_ALGORITHM", "HS256")
    TOKEN_EXPIRE_MINUTES = int(os.getenv("TOKEN_EXPIRE_MINUTES", "1440"))
    SESSION_SECRET_KEY = os.getenv("SESSION_SECRET_KEY", "change-me")
    AUTH_MODE = os.getenv("AUTH_MODE", "token")  # "token" | "session"

    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "3000"))
    LOGS_DIR = os.getenv("LOGS_DIR", "logs")
