"""
Base configuration settings
"""

import os
from typing import List, Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Base settings configuration"""
    
    # Application settings
    APP_NAME: str = "CoachVision Analysis"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    
    # API settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    ALLOWED_HOSTS_STR: str = "localhost,127.0.0.1"
    
    # Redis settings (report persistence)
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str = ""
    REDIS_DB: int = 0
    REPORT_CACHE_TTL: int = 0  # 0 = keep reports until evicted
    
    # AWS S3 settings (frame blob store)
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_REGION: str = "us-east-1"
    S3_BUCKET: str = "coachvision-frames"
    AWS_ENDPOINT_URL: Optional[str] = None
    PERSIST_FRAMES: bool = False
    FRAME_URL_EXPIRY: int = 3600
    
    # OpenAI settings
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_TIMEOUT: float = 60.0
    ENABLE_AI_ANALYSIS: str = "true"
    FRAME_MAX_TOKENS: int = 800
    AGGREGATION_MAX_TOKENS: int = 3000
    
    # Vision path settings
    MAX_ANALYSIS_FRAMES: int = 12
    FRAME_ANALYSIS_CONCURRENCY: int = 4
    ANALYSIS_TIMEOUT: float = 180.0  # 3 minutes
    FRAME_ANALYSIS_RETRIES: int = 0
    AGGREGATION_RETRIES: int = 0
    RETRY_BACKOFF_SECONDS: float = 1.0
    
    # Clip defaults when the caller sends no metadata
    DEFAULT_VIDEO_DURATION: float = 60.0
    DEFAULT_VIDEO_WIDTH: int = 1920
    DEFAULT_VIDEO_HEIGHT: int = 1080
    DEFAULT_FRAME_RATE: float = 30.0
    
    # Simulation settings
    DEFAULT_TEAM_TAG: str = "blue"
    DRILL_RECOMMENDATION_COUNT: int = 4
    KEY_MOMENT_COUNT: int = 4
    
    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""
    
    @property
    def ALLOWED_HOSTS(self) -> List[str]:
        """Parse allowed hosts from string"""
        hosts_str = os.getenv('ALLOWED_HOSTS', self.ALLOWED_HOSTS_STR)
        return [host.strip() for host in hosts_str.split(',')]
    
    @property
    def ai_analysis_enabled(self) -> bool:
        """Whether the vision path may call the model at all"""
        return self.ENABLE_AI_ANALYSIS.lower() in ['true', '1', 'yes', 'on']
    
    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore"  # Ignore extra fields from .env
    }
