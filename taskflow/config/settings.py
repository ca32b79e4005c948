# taskflow/config/settings.py
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings read from the environment"""

    APP_NAME = os.getenv('APP_NAME', 'Task Management System')
    APP_VERSION = '1.0.0'

    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///./taskflow.db')
    DATABASE_ECHO = os.getenv('DATABASE_ECHO', 'false').lower() == 'true'

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Pagination for task listings
    DEFAULT_PER_PAGE = int(os.getenv('DEFAULT_PER_PAGE', 15))
    MAX_PER_PAGE = int(os.getenv('MAX_PER_PAGE', 100))

    # Dashboard windows
    RECENT_ACTIVITY_LIMIT = 10
    DEADLINE_LIST_LIMIT = 5
    UPCOMING_WINDOW_DAYS = 7

    @classmethod
    def is_sqlite(cls) -> bool:
        return cls.DATABASE_URL.lower().startswith('sqlite')


settings = Settings
