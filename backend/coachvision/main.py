"""
FastAPI Entry Point for CoachVision Analysis
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coachvision import __version__
from coachvision.config import settings
from coachvision.errors import AnalysisError, InvalidRequestError
from coachvision.routers.analysis import router as analysis_router
from coachvision.services.video_analysis_service import video_analysis_service
from coachvision.utils.logger import get_logger, setup_logging

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE or None)
logger = get_logger(__name__)
logger.info("🚀 Starting CoachVision Analysis API initialization...")

app = FastAPI(
    title=settings.APP_NAME,
    description="Football clip analysis: vision-grounded reports with a deterministic fallback",
    version=__version__
)

if settings.DEBUG:
    # Development: Allow all origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[f"http://{host}" for host in settings.ALLOWED_HOSTS]
        + [f"https://{host}" for host in settings.ALLOWED_HOSTS],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

app.include_router(analysis_router)


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    status_code = 422 if isinstance(exc, InvalidRequestError) else 500
    if status_code == 500:
        logger.error(f"❌ {request.method} {request.url.path} failed ({exc.error_code}): {exc.message}")
    else:
        logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    body = exc.to_dict()
    body.pop("timestamp")
    return JSONResponse(status_code=status_code, content=body)


@app.get("/")
async def root():
    return {"message": f"{settings.APP_NAME} API", "status": "running", "version": __version__}


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "vision": "available" if video_analysis_service.vision_analyzer.client.enabled else "disabled",
            "frame_store": "available" if video_analysis_service.frame_store.enabled else "disabled",
        },
        "analyzers": [
            video_analysis_service.vision_analyzer.get_analyzer_info(),
            video_analysis_service.simulation_analyzer.get_analyzer_info(),
        ],
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
