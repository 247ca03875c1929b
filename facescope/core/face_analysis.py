import logging
import os
import threading

import numpy as np
from deepface import DeepFace

from facescope.config.settings import *
from facescope.core.face_detection import FaceDetector
from facescope.models.face_detection import FaceDetection

logger = logging.getLogger(__name__)


class ModelLoadError(Exception):
    pass


class FaceAnalyzer:
    """Detector, landmarks and age/gender/expression models behind one call.

    ``load_models`` must complete before ``detect`` is used. Detection and
    landmarks come from YuNet; the attribute classifiers come from DeepFace,
    which is run on each face crop with its own detector skipped.
    """

    def __init__(self, model_path=FACE_DETECTOR_MODEL_PATH, detector_factory=FaceDetector):
        self.model_path = model_path
        self.detector_factory = detector_factory
        self.detector = None
        self._loaded = threading.Event()

    @property
    def is_loaded(self):
        return self._loaded.is_set()

    def load_models(self):
        if not os.path.exists(self.model_path):
            raise ModelLoadError(f"face detector model not found at {self.model_path}")
        try:
            self.detector = self.detector_factory(self.model_path)
            # DeepFace builds and caches its models on first use
            self._classify(np.zeros((224, 224, 3), dtype=np.uint8))
        except Exception as e:
            raise ModelLoadError(str(e)) from e
        self._loaded.set()
        logger.info("Models loaded successfully")

    def detect(self, frame):
        if not self.is_loaded:
            raise ModelLoadError("models are not loaded")

        results = []
        for box, score, landmarks in self.detector.detect_faces(frame):
            crop = self._crop(frame, box)
            if crop is None:
                continue
            attributes = self._classify(crop)
            results.append(FaceDetection(
                box=box,
                score=score,
                landmarks=landmarks,
                **attributes
            ))
        return results

    def _crop(self, frame, box):
        height, width = frame.shape[:2]
        x1 = max(0, int(box.x))
        y1 = max(0, int(box.y))
        x2 = min(width, int(box.x + box.width))
        y2 = min(height, int(box.y + box.height))
        if x2 <= x1 or y2 <= y1:
            return None
        return frame[y1:y2, x1:x2]

    def _classify(self, face_img):
        analysis = DeepFace.analyze(
            img_path=face_img,
            actions=ATTRIBUTE_MODELS,
            enforce_detection=False,
            detector_backend="skip",
            silent=True
        )
        if isinstance(analysis, list):
            analysis = analysis[0]
        return parse_attributes(analysis)


GENDER_LABELS = {"Woman": "female", "Man": "male"}


def parse_attributes(analysis):
    """Normalise one DeepFace analysis dict into FaceDetection fields."""
    gender_scores = analysis.get('gender') or {}
    dominant_gender = analysis.get('dominant_gender')
    if dominant_gender is None and gender_scores:
        dominant_gender = max(gender_scores, key=gender_scores.get)
    gender = GENDER_LABELS.get(dominant_gender)
    if gender is None:
        logger.warning("No gender in face analysis result: %r", dominant_gender)

    expressions = {}
    for name, value in (analysis.get('emotion') or {}).items():
        label = EXPRESSION_LABELS.get(name, name)
        expressions[label] = float(value) / 100.0

    return {
        'age': float(analysis.get('age', 0)),
        'gender': gender,
        'gender_probability': float(gender_scores.get(dominant_gender, 0)) / 100.0,
        'expressions': expressions,
    }
