"""
Simulation path analyzer - seeded synthesis without any model call
"""

from typing import Optional

from coachvision.analyzers.base_analyzer import AnalyzerOutput, BaseAnalyzer
from coachvision.models.analysis import AnalysisRequest, AnalysisSource
from coachvision.services.deterministic_synthesizer import DeterministicSynthesizer


class SimulationAnalyzer(BaseAnalyzer):
    def __init__(self, synthesizer: Optional[DeterministicSynthesizer] = None):
        super().__init__("simulation")
        self.synthesizer = synthesizer or DeterministicSynthesizer()

    async def validate_input(self, request: AnalysisRequest) -> bool:
        # Any parsed request can be simulated
        return bool(request.identifier)

    async def analyze(self, request: AnalysisRequest) -> AnalyzerOutput:
        body = self.synthesizer.synthesize(
            identifier=request.identifier,
            team_tag=request.team_tag,
            size=request.file_size,
            subject_name=request.subject_name,
            clip_kind=request.clip_kind,
            duration=request.duration_seconds,
        )
        return AnalyzerOutput(body=body, source=AnalysisSource.SIMULATION)
