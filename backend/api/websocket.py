"""
WebSocket Handler

Live shot tracking via WebSocket connection.
The frontend runs the pose detector and streams landmarks; each connection
owns its own tracking session and receives metrics for every frame.
"""

import json
import time
import logging
from typing import Optional
from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from .schemas import (
    WebSocketMessageType,
    FrameMessage,
    FrameMetricsSchema,
    ShotRecordSchema,
    SessionSummarySchema,
)
from .settings import settings
from core.domain import PoseFrame
from core.services import ShotAnalyzer

# Configure logging
logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class CueThrottle:
    """
    Rate limit for coaching cues sent to the voice layer.

    A cue is let through only if the cooldown since the last emitted cue has
    elapsed. Repeating the same cue needs twice the cooldown, so a player
    is not told the same thing over and over.
    """

    def __init__(self, cooldown_ms: int = 5000, repeat_cooldown_ms: Optional[int] = None):
        self.cooldown_ms = cooldown_ms
        self.repeat_cooldown_ms = (
            repeat_cooldown_ms if repeat_cooldown_ms is not None else cooldown_ms * 2
        )
        self.last_cue: Optional[str] = None
        self.last_sent_ms: Optional[int] = None

    def allow(self, cue: Optional[str], now_ms: int) -> bool:
        """Check a cue against the throttle and record it if it passes."""
        if not cue:
            return False

        if self.last_sent_ms is not None:
            elapsed = now_ms - self.last_sent_ms
            required = self.repeat_cooldown_ms if cue == self.last_cue else self.cooldown_ms
            if elapsed < required:
                return False

        self.last_cue = cue
        self.last_sent_ms = now_ms
        return True

    def reset(self) -> None:
        self.last_cue = None
        self.last_sent_ms = None


class ConnectionManager:
    """
    Manages WebSocket connections.

    Each connection gets a dedicated ShotAnalyzer (one tracking session per
    camera feed) and its own cue throttle.
    """

    def __init__(self):
        self.active_connections: list[WebSocket] = []
        self.analyzers: dict[WebSocket, ShotAnalyzer] = {}
        self.throttles: dict[WebSocket, CueThrottle] = {}

    async def connect(self, websocket: WebSocket) -> None:
        """Accept new WebSocket connection."""
        await websocket.accept()
        self.active_connections.append(websocket)

        # Create dedicated session for this connection
        self.analyzers[websocket] = ShotAnalyzer(
            smoothing_alpha=settings.SMOOTHING_ALPHA,
            locale=settings.CUE_LOCALE,
            follow_through_target_frames=settings.FOLLOW_THROUGH_TARGET_FRAMES,
        )
        self.throttles[websocket] = CueThrottle(cooldown_ms=settings.CUE_COOLDOWN_MS)

        logger.info(f"New WebSocket connection. Total: {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket) -> None:
        """Handle WebSocket disconnection."""
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

        self.analyzers.pop(websocket, None)
        self.throttles.pop(websocket, None)

        logger.info(f"WebSocket disconnected. Remaining: {len(self.active_connections)}")

    def get_analyzer(self, websocket: WebSocket) -> Optional[ShotAnalyzer]:
        """Get the tracking session for a connection."""
        return self.analyzers.get(websocket)

    def get_throttle(self, websocket: WebSocket) -> Optional[CueThrottle]:
        return self.throttles.get(websocket)

    async def send_json(self, websocket: WebSocket, data: dict) -> None:
        """Send JSON data to a specific connection."""
        try:
            await websocket.send_json(data)
        except Exception as e:
            logger.error(f"Failed to send WebSocket message: {e}")

    async def send_message(
        self,
        websocket: WebSocket,
        message_type: WebSocketMessageType,
        data: dict,
    ) -> None:
        await self.send_json(websocket, {
            "type": message_type.value,
            "data": data,
            "timestamp": _now_ms(),
        })

    async def send_error(self, websocket: WebSocket, error: str) -> None:
        await self.send_message(websocket, WebSocketMessageType.ERROR, {"error": error})


# Global connection manager
manager = ConnectionManager()


async def websocket_endpoint(websocket: WebSocket) -> None:
    """
    WebSocket endpoint for live shot tracking.

    Protocol:
    1. Client connects
    2. Client sends landmarks for each camera frame
    3. Server responds with frame metrics, plus shot and cue events
    4. Client ends the session to receive the summary

    Message format (client -> server):
    {
        "type": "frame",
        "data": {
            "landmarks": [{"x": 0.5, "y": 0.2, "z": 0.0, "visibility": 0.99}, ...],
            "frame_number": 0
        },
        "timestamp": 1704067200000
    }

    Message format (server -> client):
    {
        "type": "frame_result",
        "data": { ...frame metrics... },
        "timestamp": 1704067200025
    }
    """
    await manager.connect(websocket)

    try:
        # Send session started message
        await manager.send_message(websocket, WebSocketMessageType.SESSION_STARTED, {
            "message": "Connected to ShotCoach live tracking",
        })

        # Main message loop
        while True:
            try:
                # Receive message from client
                data = await websocket.receive_json()

                # Process based on message type
                msg_type = data.get("type") if isinstance(data, dict) else None

                if msg_type == WebSocketMessageType.FRAME.value:
                    await handle_frame(websocket, data)

                elif msg_type == WebSocketMessageType.RESET_SESSION.value:
                    await handle_reset(websocket)

                elif msg_type == WebSocketMessageType.END_SESSION.value:
                    await handle_end_session(websocket)
                    break

                else:
                    await manager.send_error(websocket, f"Unknown message type: {msg_type}")

            except json.JSONDecodeError:
                await manager.send_error(websocket, "Invalid JSON")

    except WebSocketDisconnect:
        logger.info("Client disconnected")
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
    finally:
        manager.disconnect(websocket)


async def handle_frame(websocket: WebSocket, message: dict) -> None:
    """
    Run one frame through the connection's session and report the result.
    """
    analyzer = manager.get_analyzer(websocket)
    throttle = manager.get_throttle(websocket)
    if analyzer is None or throttle is None:
        await manager.send_error(websocket, "Session not initialized")
        return

    try:
        frame = FrameMessage(**(message.get("data") or {}))
    except (TypeError, ValidationError) as e:
        await manager.send_error(websocket, f"Invalid frame: {e}")
        return

    try:
        timestamp_ms = int(message.get("timestamp") or 0)
    except (TypeError, ValueError, OverflowError):
        await manager.send_error(websocket, "Invalid timestamp")
        return

    pose = PoseFrame.from_dicts(
        [lm.model_dump() for lm in frame.landmarks],
        timestamp_ms=timestamp_ms,
        frame_number=frame.frame_number,
    )
    try:
        metrics = analyzer.process_frame(pose)
    except Exception as e:
        logger.error(f"Frame processing error: {e}")
        await manager.send_error(websocket, f"Frame processing error: {e}")
        return

    await manager.send_message(
        websocket,
        WebSocketMessageType.FRAME_RESULT,
        FrameMetricsSchema.from_domain(metrics).model_dump(mode="json"),
    )

    if metrics.shot_detected:
        shot = analyzer.session.latest_shot
        logger.info(f"Shot {shot.shot_number} detected (score {shot.pose_score})")
        await manager.send_message(
            websocket,
            WebSocketMessageType.SHOT_DETECTED,
            ShotRecordSchema.from_domain(shot).model_dump(mode="json"),
        )

    if throttle.allow(metrics.cue, metrics.timestamp_ms):
        await manager.send_message(websocket, WebSocketMessageType.COACHING_CUE, {
            "cue": metrics.cue,
            "frame_number": metrics.frame_number,
        })


async def handle_reset(websocket: WebSocket) -> None:
    """Clear shots and rolling state for this connection."""
    analyzer = manager.get_analyzer(websocket)
    throttle = manager.get_throttle(websocket)
    if analyzer is not None:
        analyzer.reset()
    if throttle is not None:
        throttle.reset()

    await manager.send_message(websocket, WebSocketMessageType.SESSION_RESET, {
        "message": "Session reset",
    })


async def handle_end_session(websocket: WebSocket) -> None:
    """Send the session summary."""
    analyzer = manager.get_analyzer(websocket)
    if analyzer is None:
        await manager.send_error(websocket, "Session not initialized")
        return

    summary = analyzer.summary()
    logger.info(f"Session ended with {summary.shot_count} shots")

    await manager.send_message(
        websocket,
        WebSocketMessageType.SESSION_SUMMARY,
        SessionSummarySchema.from_domain(summary).model_dump(mode="json"),
    )
