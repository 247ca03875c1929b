import logging
import os
import sys
import threading
import time

import cv2
from facescope.config.settings import *

logger = logging.getLogger(__name__)


class CameraError(Exception):
    pass


class CameraUnsupportedError(CameraError):
    pass


class CameraPermissionError(CameraError):
    pass


class CameraNotFoundError(CameraError):
    pass


class CameraPlaybackError(CameraError):
    pass


def parse_camera_source(camera_source):
    """Digits select a local camera index, anything else is passed to OpenCV as is"""
    camera_source = str(camera_source).strip()
    if camera_source.isdigit():
        return int(camera_source)
    return camera_source


def _check_local_device(index):
    if not cv2.videoio_registry.getCameraBackends():
        raise CameraUnsupportedError("no video capture backend is available")

    if not sys.platform.startswith('linux'):
        return

    device = f"/dev/video{index}"
    if not os.path.exists(device):
        raise CameraNotFoundError(f"{device} does not exist")
    if not os.access(device, os.R_OK | os.W_OK):
        raise CameraPermissionError(f"no read/write access to {device}")


def open_camera(source, width=CAMERA_IDEAL_WIDTH, height=CAMERA_IDEAL_HEIGHT):
    if isinstance(source, int):
        _check_local_device(source)

    stream = cv2.VideoCapture(source)
    if not stream.isOpened():
        stream.release()
        raise CameraError(f"cannot open stream {source}")

    # Requested size is a preference; the driver may pick another
    stream.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    stream.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    return stream


class CameraStream:
    def __init__(self, stream_source, analyzer, interval=DETECTION_INTERVAL_MS / 1000.0,
                 opener=open_camera):
        self.stream_source = stream_source
        self.analyzer = analyzer
        self.interval = interval
        self.opener = opener
        self.stream = None
        self.stop_event = threading.Event()
        self.video_ready = threading.Event()
        self.thread_read = None
        self.thread_detect = None
        self.latest_frame = [None]
        self.frame_lock = threading.Lock()
        self.latest_result = [None]
        self.result_lock = threading.Lock()
        self.playback_error = None

        self.fps = 0.0
        self.frame_count = 0
        self.start_time = time.time()

    def start(self):
        """Open the camera and start the reader and detection threads.

        Raises a ``CameraError`` subclass when the camera cannot be opened.
        """
        self.stream = self.opener(self.stream_source)
        self.stop_event.clear()
        self.thread_read = threading.Thread(target=self._read_frames, daemon=True)
        self.thread_detect = threading.Thread(target=self._process_frames, daemon=True)
        self.thread_read.start()
        self.thread_detect.start()
        logger.info("Camera stream started for source %s", self.stream_source)

    def stop(self):
        self.stop_event.set()
        # Releasing first unblocks a reader stuck in read()
        if self.stream:
            self.stream.release()
        for thread in (self.thread_read, self.thread_detect):
            if thread and thread is not threading.current_thread():
                thread.join()

        self.thread_read = None
        self.thread_detect = None
        self.stream = None
        logger.info("Camera stream stopped")

    def frame_size(self):
        with self.frame_lock:
            frame = self.latest_frame[0]
        if frame is None:
            return None
        return frame.shape[1], frame.shape[0]

    def read_latest(self):
        """Copy of the newest camera frame, or None before the first one"""
        with self.frame_lock:
            frame = self.latest_frame[0]
        return None if frame is None else frame.copy()

    def take_result(self):
        """Pop the latest (frame, detections, error) result, if any"""
        with self.result_lock:
            result = self.latest_result[0]
            self.latest_result[0] = None
        return result

    def _read_frames(self):
        while not self.stop_event.is_set():
            ret, frame = self.stream.read()
            if not ret:
                if self.stop_event.is_set():
                    break
                if not self.video_ready.is_set():
                    self.playback_error = CameraPlaybackError(
                        f"no frames received from {self.stream_source}")
                    logger.error("Error playing video: %s", self.playback_error)
                else:
                    logger.warning("Camera stream %s ended", self.stream_source)
                break
            with self.frame_lock:
                self.latest_frame[0] = frame
            if not self.video_ready.is_set():
                logger.info("Video started, resolution: %dx%d", frame.shape[1], frame.shape[0])
                self.video_ready.set()

    def _process_frames(self):
        while not self.stop_event.wait(self.interval):
            if not self.analyzer.is_loaded:
                continue
            with self.frame_lock:
                if self.latest_frame[0] is None:
                    continue
                frame = self.latest_frame[0].copy()

            try:
                detections = self.analyzer.detect(frame)
                error = None
            except Exception as e:
                logger.exception("Error during face detection")
                detections, error = [], e

            with self.result_lock:
                self.latest_result[0] = (frame, detections, error)

            self._update_fps()

    def _update_fps(self):
        self.frame_count += 1
        elapsed_time = time.time() - self.start_time
        if elapsed_time > 1.0:
            self.fps = self.frame_count / elapsed_time
            self.frame_count = 0
            self.start_time = time.time()
