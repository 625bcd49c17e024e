"""
Exception hierarchy for the analysis pipeline
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class AnalysisError(Exception):
    """Base exception for analysis errors"""
    
    error_code = "ANALYSIS_ERROR"
    
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
    
    def to_dict(self) -> Dict[str, Any]:
        """Serialize for API responses and logs"""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp,
        }


class InvalidRequestError(AnalysisError):
    """Malformed analysis request, rejected before any work is done"""
    
    error_code = "INVALID_REQUEST"


class VisionModelError(AnalysisError):
    """Network or provider failure while calling the vision model"""
    
    error_code = "MODEL_CALL_FAILED"


class VisionModelTimeout(VisionModelError):
    """Vision model did not answer within its timeout"""
    
    error_code = "MODEL_TIMEOUT"


class SchemaViolationError(AnalysisError):
    """Model response did not parse against the required JSON schema"""
    
    error_code = "SCHEMA_VIOLATION"


class AggregationError(AnalysisError):
    """Frame observations could not be reduced into a report"""
    
    error_code = "AGGREGATION_FAILED"


class ReportAssemblyError(AnalysisError):
    """A generator output is missing a required report field"""
    
    error_code = "MISSING_FIELD"
