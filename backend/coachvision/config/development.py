"""
Development environment configuration
"""

from coachvision.config.base import Settings


class DevelopmentSettings(Settings):
    """Development-specific settings"""
    
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"
    
    # Relaxed timeouts for development
    ANALYSIS_TIMEOUT: float = 600.0  # 10 minutes
    
    # Keep frames around for debugging prompts
    PERSIST_FRAMES: bool = True
    S3_BUCKET: str = "coachvision-dev-frames"
    
    model_config = {**Settings.model_config, "env_file": ".env.development"}
