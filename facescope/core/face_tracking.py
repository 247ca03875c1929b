import time
from facescope.models.face_detection import LastDetection
from facescope.config.settings import *


class FaceTracker:
    """Keeps the most recent positive detection to bridge short gaps."""

    def __init__(self, grace_window=GRACE_WINDOW, clock=time.monotonic):
        self.grace_window = grace_window
        self.clock = clock
        self.last_detection = None

    def update(self, detections, current_time=None):
        """Return ``(detection, stale)`` for this frame, or ``(None, False)``."""
        if current_time is None:
            current_time = self.clock()

        best = self._best_detection(detections)
        if best is not None:
            self.last_detection = LastDetection(best, current_time)
            return best, False

        if self._within_grace_window(current_time):
            return self.last_detection.detection, True

        return None, False

    def _best_detection(self, detections):
        if not detections:
            return None
        return sorted(detections, key=lambda d: d.score, reverse=True)[0]

    def _within_grace_window(self, current_time):
        return (self.last_detection is not None
                and self.last_detection.age_at(current_time) < self.grace_window)
