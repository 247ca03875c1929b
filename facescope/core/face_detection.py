import cv2
import numpy as np
from facescope.config.settings import *
from facescope.models.face_detection import FaceBox


class FaceDetector:
    def __init__(self, model_path=FACE_DETECTOR_MODEL_PATH,
                 min_confidence=FACE_DETECTION_MIN_CONFIDENCE):
        self.detector = cv2.FaceDetectorYN.create(
            model=model_path,
            config="",
            input_size=FACE_DETECTION_SIZE,
            score_threshold=min_confidence,
            nms_threshold=FACE_DETECTION_NMS_THRESHOLD,
            top_k=FACE_DETECTION_TOP_K
        )

    def detect_faces(self, frame):
        """Return (box, score, landmarks) tuples in frame coordinates."""
        small_frame = cv2.resize(frame, FACE_DETECTION_SIZE)
        height, width, _ = small_frame.shape
        self.detector.setInputSize((width, height))
        _, faces = self.detector.detect(small_frame)

        if faces is None:
            return []

        scale_x = frame.shape[1] / width
        scale_y = frame.shape[0] / height

        detections = []
        for face in faces:
            x, y, w, h = face[:4]
            box = FaceBox(float(x), float(y), float(w), float(h)).scaled(scale_x, scale_y)
            landmarks = np.array(face[4:14], dtype=np.float32).reshape((5, 2))
            landmarks[:, 0] *= scale_x
            landmarks[:, 1] *= scale_y
            detections.append((box, float(face[14]), landmarks))

        return detections
