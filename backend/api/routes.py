"""
REST API Routes

FastAPI routes for basketball shot analysis.
Handles HTTP requests for single-pose and recorded-session analysis.
"""

import logging
from fastapi import APIRouter, HTTPException

from .schemas import (
    PoseFrameSchema,
    PoseAnalysisResponse,
    AnalyzeSessionRequest,
    SessionAnalysisResponse,
    FrameMetricsSchema,
    SessionSummarySchema,
    JointAnglesSchema,
    ShotPhaseEnum,
    HandednessEnum,
    ScoreBandEnum,
    HealthResponse,
)
from .settings import settings
from core.domain import is_complete_pose, score_band
from core.services import (
    AngleCalculator,
    PostureEvaluator,
    ShotAnalyzer,
    detect_ball_in_hand,
    detect_shooting_hand,
    get_pose_score,
    get_shot_phase,
    get_stability_score,
)

API_VERSION = "1.0.0"

# Configure logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

# =============================================================================
# Health Check
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check endpoint"
)
async def health_check() -> HealthResponse:
    """
    Check if the API is running.

    Returns:
        Health status and version information
    """
    return HealthResponse(status="healthy", version=API_VERSION)


# =============================================================================
# Single Pose
# =============================================================================

@router.post(
    "/pose/analyze",
    response_model=PoseAnalysisResponse,
    tags=["Pose Analysis"],
    summary="Analyze a single pose"
)
async def analyze_pose(request: PoseFrameSchema) -> PoseAnalysisResponse:
    """
    Stateless analysis of one frame of landmarks.

    This endpoint is useful for:
    - Checking a set point or follow-through from a still image
    - Testing the engine without a live stream

    For live tracking (shots, jump height, follow-through), use the
    WebSocket endpoint instead.
    """
    pose = request.to_domain()

    if not is_complete_pose(pose):
        return PoseAnalysisResponse(
            pose_present=False,
            phase=ShotPhaseEnum.IDLE,
            pose_score=0,
            band=ScoreBandEnum.POOR,
            stability=0,
        )

    shooting_hand = detect_shooting_hand(pose)
    pose_score = get_pose_score(pose)

    return PoseAnalysisResponse(
        pose_present=True,
        phase=ShotPhaseEnum(get_shot_phase(pose).value),
        cue=PostureEvaluator(locale=settings.CUE_LOCALE).get_feedback(pose),
        pose_score=pose_score,
        band=ScoreBandEnum(score_band(pose_score)),
        stability=get_stability_score(pose),
        shooting_hand=HandednessEnum(shooting_hand.value),
        ball_in_hand=detect_ball_in_hand(pose),
        angles=JointAnglesSchema.from_domain(
            AngleCalculator.calculate_all_angles(pose, shooting_hand)
        ),
    )


# =============================================================================
# Recorded Session
# =============================================================================

@router.post(
    "/session/analyze",
    response_model=SessionAnalysisResponse,
    tags=["Session Analysis"],
    summary="Analyze a recorded sequence of poses"
)
async def analyze_session(request: AnalyzeSessionRequest) -> SessionAnalysisResponse:
    """
    Run the live pipeline over a recorded clip.

    Frames are processed in order through a fresh tracking session, exactly
    as if they had arrived over the WebSocket.

    Returns:
        Metrics for every frame and the session summary
    """
    if not request.frames:
        raise HTTPException(status_code=400, detail="No frames to analyze")

    analyzer = ShotAnalyzer(
        smoothing_alpha=settings.SMOOTHING_ALPHA,
        locale=request.locale or settings.CUE_LOCALE,
        follow_through_target_frames=settings.FOLLOW_THROUGH_TARGET_FRAMES,
    )
    results = analyzer.analyze_frames(frame.to_domain() for frame in request.frames)
    summary = analyzer.summary()

    logger.info(f"Analyzed {len(results)} frames: {summary.shot_count} shots detected")

    return SessionAnalysisResponse(
        frames=[FrameMetricsSchema.from_domain(m) for m in results],
        summary=SessionSummarySchema.from_domain(summary),
    )
