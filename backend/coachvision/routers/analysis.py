"""
Analysis endpoints
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException

from coachvision.services.video_analysis_service import VideoAnalysisService, get_video_analysis_service
from coachvision.utils.logger import get_logger
from coachvision.utils.team_profiles import get_team_profile, is_known_team, list_team_tags

logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["Analysis"])


@router.post("/analysis")
async def create_analysis(
    payload: Any = Body(...),
    service: VideoAnalysisService = Depends(get_video_analysis_service),
) -> Dict[str, Any]:
    """Run the analysis pipeline for one clip and return the report"""
    report = await service.analyze_payload(payload)
    return report.to_response()


@router.get("/analysis/video/{identifier}")
async def list_video_analyses(
    identifier: str,
    service: VideoAnalysisService = Depends(get_video_analysis_service),
) -> Dict[str, Any]:
    """Ids of every stored analysis of one clip"""
    return {"identifier": identifier, "analysisIds": await service.list_reports(identifier)}


@router.get("/analysis/{analysis_id}")
async def get_analysis(
    analysis_id: str,
    service: VideoAnalysisService = Depends(get_video_analysis_service),
) -> Dict[str, Any]:
    report = await service.get_report(analysis_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Analysis not found")
    return report


@router.get("/analysis/{analysis_id}/frames")
async def get_analysis_frames(
    analysis_id: str,
    service: VideoAnalysisService = Depends(get_video_analysis_service),
) -> Dict[str, Any]:
    urls = await service.get_frame_urls(analysis_id)
    if urls is None:
        raise HTTPException(status_code=404, detail="Analysis not found")
    return {"analysisId": analysis_id, "frameUrls": urls}


@router.get("/team-profiles")
async def list_team_profiles() -> Dict[str, Any]:
    return {
        "profiles": [
            get_team_profile(tag).model_dump(mode="json", by_alias=True) for tag in list_team_tags()
        ]
    }


@router.get("/team-profiles/{team_tag}")
async def get_team_profile_endpoint(team_tag: str) -> Dict[str, Any]:
    if not is_known_team(team_tag):
        raise HTTPException(status_code=404, detail=f"Unknown team tag: {team_tag}")
    return get_team_profile(team_tag).model_dump(mode="json", by_alias=True)
