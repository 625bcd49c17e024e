"""
Production environment configuration
"""

from coachvision.config.base import Settings


class ProductionSettings(Settings):
    """Production-specific settings"""
    
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"
    
    S3_BUCKET: str = "coachvision-prod-frames"
    
    # Strict timeouts for production
    ANALYSIS_TIMEOUT: float = 120.0
    
    # Fewer frames and a pool sized to the provider rate limit
    MAX_ANALYSIS_FRAMES: int = 8
    FRAME_ANALYSIS_CONCURRENCY: int = 3
    
    # Reports are mirrored into the academy database, keep the cache short
    REPORT_CACHE_TTL: int = 7 * 24 * 3600
    
    model_config = {**Settings.model_config, "env_file": ".env.production"}
