"""
Unit tests for facescope.utils.drawing
"""
import numpy as np

from facescope.models.face_detection import FaceBox
from facescope.utils.drawing import draw_detections, draw_face_landmarks, resize_result
from factories import make_detection


class TestResizeResult:
    def test_scales_box_and_landmarks(self):
        detection = make_detection(box=FaceBox(10, 20, 30, 40))

        resized = resize_result(detection, (100, 100), (200, 50))

        assert resized.box == FaceBox(20, 10, 60, 20)
        np.testing.assert_allclose(resized.landmarks[0], [40, 10])

    def test_original_untouched(self):
        detection = make_detection(box=FaceBox(10, 20, 30, 40))
        before = detection.landmarks.copy()

        resize_result(detection, (100, 100), (300, 300))

        assert detection.box == FaceBox(10, 20, 30, 40)
        np.testing.assert_array_equal(detection.landmarks, before)

    def test_keeps_attributes(self):
        detection = make_detection(age=50.5, gender="female")
        resized = resize_result(detection, (100, 100), (50, 50))
        assert resized.age == 50.5
        assert resized.gender == "female"
        assert resized.expressions == detection.expressions


class TestDraw:
    def test_draw_detections_marks_box(self, frame):
        draw_detections(frame, make_detection(box=FaceBox(10, 10, 40, 40)))
        assert frame[10, 30].any()
        assert not frame[100, 150].any()

    def test_draw_face_landmarks_marks_points(self, frame):
        detection = make_detection()
        draw_face_landmarks(frame, detection)
        x, y = detection.landmarks[2]
        assert frame[int(y), int(x)].any()
