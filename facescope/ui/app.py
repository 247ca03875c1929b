import logging
import threading
import time

import cv2
import customtkinter as ctk

from facescope.config.settings import *
from facescope.core.face_analysis import FaceAnalyzer
from facescope.core.face_session import FaceSession
from facescope.services.camera_service import CameraError, CameraStream, parse_camera_source
from facescope.services.logger_service import FaceDetectionLogger
from .components.control_frame import ControlFrame
from .components.info_frame import InfoFrame
from .components.stats_frame import StatsFrame
from .components.status_frame import StatusFrame

logger = logging.getLogger(__name__)


class FaceScopeApp:
    def __init__(self, camera_source=CAMERA_SOURCE, analyzer=None, detection_logger=None):
        ctk.set_appearance_mode(APPEARANCE_MODE)
        ctk.set_default_color_theme(COLOR_THEME)

        self.root = ctk.CTk()
        self.root.title(GUI_WINDOW_TITLE)
        self.root.geometry(GUI_WINDOW_SIZE)

        self.camera_source = parse_camera_source(camera_source)
        self.analyzer = analyzer or FaceAnalyzer()
        self.detection_logger = detection_logger or FaceDetectionLogger()
        self.session = FaceSession()
        self.camera_stream = None
        self.last_stats_time = time.time()
        self._models_result = None
        self._playback_reported = False
        self._after_id = None

        self._setup_ui()
        self._load_models_async()
        self.update_frame()

    def _setup_ui(self):
        self.main_frame = ctk.CTkFrame(self.root)
        self.main_frame.pack(fill="both", expand=True, padx=20, pady=20)

        self.title_label = ctk.CTkLabel(
            self.main_frame,
            text=GUI_TITLE,
            font=("Helvetica", 24)
        )
        self.title_label.pack(pady=20)

        self.control_frame = ControlFrame(
            self.main_frame,
            {'start_camera': self.start_camera}
        )
        self.control_frame.pack(fill="x", padx=10, pady=10)

        self.info_frame = InfoFrame(self.main_frame)
        self.info_frame.pack(fill="x", padx=10, pady=10)

        self.stats_frame = StatsFrame(self.main_frame)
        self.stats_frame.pack(fill="x", padx=10, pady=10)

        self.status_frame = StatusFrame(self.main_frame)
        self.status_frame.pack(fill="x", padx=10, pady=10)

        self.root.protocol("WM_DELETE_WINDOW", self.on_closing)

    def _load_models_async(self):
        def load():
            try:
                self.analyzer.load_models()
                self._models_result = (True, None)
            except Exception as e:
                self._models_result = (False, e)

        threading.Thread(target=load, daemon=True).start()

    def _apply_models_result(self):
        if self._models_result is None:
            return
        loaded, error = self._models_result
        self._models_result = None
        if loaded:
            self.session.on_models_loaded()
            self.status_frame.update_status("Models loaded")
        else:
            self.session.on_models_failed(error)
            self.status_frame.update_status("Model loading failed")

    def start_camera(self):
        if self.camera_stream is not None:
            return

        self.control_frame.disable()
        self.session.on_camera_started()
        self.status_frame.update_status(f"Opening camera {self.camera_source}...")

        camera_stream = CameraStream(self.camera_source, self.analyzer)
        try:
            camera_stream.start()
        except CameraError as e:
            self.session.on_camera_failed(e)
            self.status_frame.update_status("Camera unavailable")
            self.control_frame.enable()
            return

        self.camera_stream = camera_stream
        self._playback_reported = False
        self.status_frame.update_status("Camera started")

    def _check_video(self):
        stream = self.camera_stream
        if stream is None:
            return
        if stream.playback_error is not None and not self._playback_reported:
            self._playback_reported = True
            self.session.on_playback_failed(stream.playback_error)
        if stream.video_ready.is_set() and not self.session.is_video_ready:
            self.session.on_video_ready()

    def _show_preview(self):
        frame = self.camera_stream.read_latest()
        if frame is not None:
            cv2.imshow(OPENCV_WINDOW_NAME, frame)
            cv2.waitKey(1)

    def _process_result(self):
        result = self.camera_stream.take_result()
        if result is None:
            return

        frame, detections, error = result
        if error is not None:
            self.session.on_detection_failed(error)
            return

        overlay = self.session.process(frame, detections)
        cv2.imshow(OPENCV_WINDOW_NAME, overlay)
        cv2.waitKey(1)

        current_time = time.time()
        if self.detection_logger.should_update(current_time, self.session.info):
            self.detection_logger.update_log(self.session.info, current_time)

    def update_frame(self):
        self._apply_models_result()
        self._check_video()

        if self.session.can_detect:
            self._process_result()
        elif self.session.is_video_ready:
            self._show_preview()

        self.info_frame.show(self.session.panel_lines(), self.session.panel_kind())

        current_time = time.time()
        if self.camera_stream is not None and current_time - self.last_stats_time >= STATS_UPDATE_INTERVAL:
            self.stats_frame.update_stats(self.camera_stream.fps, self.camera_stream.frame_size())
            self.last_stats_time = current_time

        self._after_id = self.root.after(DETECTION_INTERVAL_MS, self.update_frame)

    def on_closing(self):
        if self._after_id is not None:
            self.root.after_cancel(self._after_id)
            self._after_id = None
        if self.camera_stream:
            self.camera_stream.stop()
            self.camera_stream = None
        cv2.destroyAllWindows()
        self.root.destroy()
