# config/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _env_int(name, default):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


# Supabase configuration (optional detection log)
SUPABASE_URL = os.getenv('SUPABASE_URL')
SUPABASE_KEY = os.getenv('SUPABASE_API_KEY')
SUPABASE_LOG_TABLE = os.getenv('SUPABASE_LOG_TABLE', 'face_log')

# Model paths
FACE_DETECTOR_MODEL_PATH = os.getenv('FACE_DETECTOR_MODEL_PATH', "model/yunet.onnx")
ATTRIBUTE_MODELS = ("age", "gender", "emotion")

# Face detection settings
FACE_DETECTION_SIZE = (320, 320)
FACE_DETECTION_MIN_CONFIDENCE = 0.2
FACE_DETECTION_NMS_THRESHOLD = 0.3
FACE_DETECTION_TOP_K = 50

# Expression labels shown on the panel, keyed by DeepFace emotion name
EXPRESSION_LABELS = {
    "neutral": "neutral",
    "happy": "happy",
    "sad": "sad",
    "angry": "angry",
    "fear": "fearful",
    "disgust": "disgusted",
    "surprise": "surprised",
}

# Camera settings
CAMERA_SOURCE = os.getenv('CAMERA_SOURCE', '0')
CAMERA_IDEAL_WIDTH = _env_int('CAMERA_IDEAL_WIDTH', 1280)
CAMERA_IDEAL_HEIGHT = _env_int('CAMERA_IDEAL_HEIGHT', 720)

# Polling loop
DETECTION_INTERVAL_MS = 33
GRACE_WINDOW = 1.0  # seconds
STATS_UPDATE_INTERVAL = 1.0  # seconds
MIN_LOG_UPDATE_INTERVAL = 5  # seconds

# Display
OPENCV_WINDOW_NAME = 'FaceScope'
GUI_WINDOW_TITLE = "FaceScope"
GUI_WINDOW_SIZE = "420x520"
GUI_TITLE = "AI Face Detection"
APPEARANCE_MODE = "dark"
COLOR_THEME = "blue"

# Colors (BGR)
COLOR_BOX = (255, 128, 0)
COLOR_LANDMARK = (0, 255, 255)
COLOR_WHITE = (255, 255, 255)

# Logging
LOG_LEVEL = os.getenv('FACESCOPE_LOG_LEVEL', 'INFO').upper()
LOGS_DIR = os.getenv('FACESCOPE_LOGS_DIR', '.facescope/logs')
