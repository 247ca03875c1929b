import cv2
import numpy as np
from facescope.config.settings import COLOR_BOX, COLOR_LANDMARK, COLOR_WHITE


def resize_result(detection, from_size, to_size):
    """Map a detection from a (width, height) source onto a (width, height) target"""
    scale_x = to_size[0] / from_size[0]
    scale_y = to_size[1] / from_size[1]
    landmarks = np.array(detection.landmarks, dtype=np.float32).reshape((-1, 2)).copy()
    landmarks[:, 0] *= scale_x
    landmarks[:, 1] *= scale_y
    return detection.with_geometry(detection.box.scaled(scale_x, scale_y), landmarks)


def draw_detections(frame, detection):
    """Draw the detection box with its confidence score"""
    box = detection.box
    x, y = int(box.x), int(box.y)
    x2, y2 = int(box.x + box.width), int(box.y + box.height)

    cv2.rectangle(frame, (x, y), (x2, y2), COLOR_BOX, 2)

    label = f"{detection.score:.2f}"
    label_size = cv2.getTextSize(label, cv2.FONT_HERSHEY_SIMPLEX, 0.6, 2)[0]
    cv2.rectangle(frame,
                  (x, y2),
                  (x + label_size[0] + 6, y2 + label_size[1] + 10),
                  COLOR_BOX, -1)
    cv2.putText(frame, label,
                (x + 3, y2 + label_size[1] + 4),
                cv2.FONT_HERSHEY_SIMPLEX, 0.6,
                COLOR_WHITE, 2)

    return frame


def draw_face_landmarks(frame, detection):
    for px, py in np.asarray(detection.landmarks).reshape((-1, 2)):
        cv2.circle(frame, (int(px), int(py)), 3, COLOR_LANDMARK, -1)
    return frame
