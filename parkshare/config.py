import os
from zoneinfo import ZoneInfo
from dotenv import load_dotenv

load_dotenv()

class Config:
    SECONDS_PER_MINUTE = 60
    MINUTES_PER_HOUR = 60
    TIMEZONE = 'Asia/Kolkata'

    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///parkshare.db")
    SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # FALLBACK HOURLY RATES WHEN A SPACE HAS NONE STORED
    DEFAULT_RATES = {"car": 20, "bike": 10, "ev": 30}

    SEARCH_LIMIT = 50
    QR_CODE_PREFIX = "PARK-"
    QR_CODE_LENGTH = 8


    @staticmethod
    def get_timezone():
        return ZoneInfo(Config.TIMEZONE)
