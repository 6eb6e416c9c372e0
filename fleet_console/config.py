# fleet_console/config.py
import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    FLEET_API_BASE_URL = os.getenv("FLEET_API_BASE_URL", "http://localhost:3000")
    FLEET_API_TOKEN = os.getenv("FLEET_API_TOKEN")
    FLEET_API_TIMEOUT = float(os.getenv("FLEET_API_TIMEOUT", "15"))
    # Timezone used to render timestamps in tables and exports
    DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "Africa/Accra")
    EXPIRY_WINDOW_DAYS = int(os.getenv("EXPIRY_WINDOW_DAYS", "30"))
    LOG_FILE = os.getenv("LOG_FILE", os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "app.log")))
