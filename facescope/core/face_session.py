import logging
import time

import cv2

from facescope.core.face_info import face_info_from_detection, gender_label
from facescope.core.face_tracking import FaceTracker
from facescope.services.camera_service import (
    CameraNotFoundError,
    CameraPermissionError,
    CameraUnsupportedError,
)
from facescope.utils.drawing import draw_detections, draw_face_landmarks, resize_result

logger = logging.getLogger(__name__)

LOADING_MESSAGE = "Loading face AI models..."
NO_FACE_MESSAGE = "No face detected."
CAMERA_UNSUPPORTED_MESSAGE = ("Camera is not supported on this system "
                              "(no video capture backend is available).")
CAMERA_PERMISSION_MESSAGE = ("Camera permission denied. "
                             "Please allow camera access in your system settings.")
CAMERA_NOT_FOUND_MESSAGE = "No camera was found on this device."


def camera_error_message(error):
    if isinstance(error, CameraUnsupportedError):
        return CAMERA_UNSUPPORTED_MESSAGE
    if isinstance(error, CameraPermissionError):
        return CAMERA_PERMISSION_MESSAGE
    if isinstance(error, CameraNotFoundError):
        return CAMERA_NOT_FOUND_MESSAGE
    return f"Failed to access camera: {error}"


class FaceSession:
    """UI state for one camera page.

    Holds the readiness flags, the current error string and the info shown
    on the panel. Every failure ends up as a single message in ``error``.
    """

    def __init__(self, tracker=None, clock=time.monotonic):
        self.tracker = tracker or FaceTracker(clock=clock)
        self.clock = clock
        self.is_loading = True
        self.is_camera_started = False
        self.is_video_ready = False
        self.error = None
        self.info = None

    @property
    def can_detect(self):
        return not self.is_loading and self.is_video_ready and self.is_camera_started

    def on_models_loaded(self):
        self.is_loading = False

    def on_models_failed(self, error):
        logger.error("Error loading models: %s", error)
        self.error = f"Failed to load models: {error}"

    def on_camera_started(self):
        self.is_camera_started = True

    def on_camera_failed(self, error):
        logger.error("Error accessing camera: %s", error)
        self.error = camera_error_message(error)

    def on_playback_failed(self, error):
        self.error = f"Failed to play video: {error}"

    def on_video_ready(self):
        self.is_video_ready = True
        self.error = None

    def on_detection_failed(self, error):
        self.error = f"Face detection error: {error}"

    def process(self, frame, detections, display_size=None, current_time=None):
        """Apply one detection tick and return the frame with its overlay.

        ``display_size`` is the (width, height) of the drawing surface; the
        chosen detection is resized onto it from the frame's own size.
        """
        if current_time is None:
            current_time = self.clock()

        frame_size = (frame.shape[1], frame.shape[0])
        display_size = display_size or frame_size
        overlay = frame.copy() if display_size == frame_size else cv2.resize(frame, display_size)

        detection, stale = self.tracker.update(detections, current_time)
        if detection is None:
            logger.debug("No face detected")
            self.info = None
            return overlay

        if not stale:
            logger.debug("Face detected, confidence: %.3f", detection.score)
            self.error = None

        resized = resize_result(detection, frame_size, display_size)
        draw_detections(overlay, resized)
        draw_face_landmarks(overlay, resized)
        self.info = face_info_from_detection(detection)
        return overlay

    def panel_kind(self):
        if self.error:
            return "error"
        if self.is_loading:
            return "loading"
        return "info" if self.info else "empty"

    def panel_lines(self):
        if self.error:
            return [self.error]
        if self.is_loading:
            return [LOADING_MESSAGE]
        if self.info:
            return [
                f"Age: {self.info.age} years",
                f"Gender: {gender_label(self.info.gender)}",
                f"Expression: {self.info.expression}",
            ]
        return [NO_FACE_MESSAGE]
