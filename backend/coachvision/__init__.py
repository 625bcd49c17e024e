"""
CoachVision - video-to-report analysis synthesis for football academies
"""

__version__ = "1.0.0"
