from dataclasses import dataclass, field, replace
from typing import Optional

import numpy as np


@dataclass
class FaceBox:
    x: float
    y: float
    width: float
    height: float

    def scaled(self, scale_x, scale_y):
        return FaceBox(self.x * scale_x, self.y * scale_y,
                       self.width * scale_x, self.height * scale_y)


@dataclass
class FaceDetection:
    """One analysed face: location, landmarks and estimated attributes."""
    box: FaceBox
    score: float
    landmarks: np.ndarray = field(default_factory=lambda: np.zeros((0, 2), dtype=np.float32))
    age: float = 0.0
    gender: Optional[str] = None
    gender_probability: float = 0.0
    expressions: dict = field(default_factory=dict)

    def with_geometry(self, box, landmarks):
        return replace(self, box=box, landmarks=landmarks)


@dataclass
class LastDetection:
    detection: FaceDetection
    timestamp: float

    def age_at(self, now):
        return now - self.timestamp


@dataclass
class FaceInfo:
    age: str
    gender: Optional[str]
    expression: str
