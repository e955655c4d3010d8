import os
from datetime import datetime
import pytz
from dotenv import load_dotenv

load_dotenv()

APP_TIMEZONE = os.getenv("APP_TIMEZONE", "UTC")

def now_local() -> datetime:
    """Current time in the configured application timezone."""
    return datetime.now(pytz.timezone(APP_TIMEZONE))
