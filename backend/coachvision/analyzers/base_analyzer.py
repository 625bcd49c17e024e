"""
Base analyzer abstract class
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

from coachvision.models.analysis import AnalysisRequest, AnalysisSource, FrameObservation
from coachvision.utils.logger import LoggerMixin


@dataclass
class AnalyzerOutput:
    """Raw report body from one analysis path, before assembly"""
    body: Dict[str, Any]
    source: AnalysisSource
    frame_analyses: List[FrameObservation] = field(default_factory=list)


class BaseAnalyzer(ABC, LoggerMixin):
    """Abstract base class for both analysis paths"""

    def __init__(self, analyzer_type: str):
        self.analyzer_type = analyzer_type

    @abstractmethod
    async def analyze(self, request: AnalysisRequest) -> AnalyzerOutput:
        """
        Produce the raw report body for a request

        Args:
            request: Validated analysis request

        Returns:
            AnalyzerOutput ready for the report assembler
        """

    @abstractmethod
    async def validate_input(self, request: AnalysisRequest) -> bool:
        """
        Whether this analyzer can handle the request

        Args:
            request: Validated analysis request

        Returns:
            bool: True if this path applies, False otherwise
        """

    def get_analyzer_info(self) -> Dict:
        """Get information about this analyzer"""
        return {
            "type": self.analyzer_type,
            "name": self.__class__.__name__,
            "version": "1.0.0"
        }
