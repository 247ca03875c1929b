"""
Unit tests for facescope.services.camera_service
"""
import threading
import time

import numpy as np
import pytest

from facescope.services import camera_service
from facescope.services.camera_service import (
    CameraError,
    CameraNotFoundError,
    CameraPermissionError,
    CameraPlaybackError,
    CameraStream,
    CameraUnsupportedError,
    open_camera,
    parse_camera_source,
)


class FakeCapture:
    def __init__(self, frames):
        self.frames = list(frames)
        self.released = False

    def read(self):
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def release(self):
        self.released = True


class FakeAnalyzer:
    is_loaded = True

    def __init__(self, result=None, error=None):
        self.result = result or []
        self.error = error

    def detect(self, frame):
        if self.error:
            raise self.error
        return self.result


def wait_for(predicate, timeout=2.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        value = predicate()
        if value:
            return value
        time.sleep(0.01)
    return None


class TestParseCameraSource:
    def test_digits_are_indices(self):
        assert parse_camera_source("0") == 0
        assert parse_camera_source(" 1 ") == 1

    def test_other_strings_pass_through(self):
        assert parse_camera_source("192.168.1.5") == "192.168.1.5"
        assert parse_camera_source("clip.mp4") == "clip.mp4"

    def test_urls_pass_through(self):
        assert parse_camera_source("rtsp://cam/live") == "rtsp://cam/live"
        assert parse_camera_source("http://cam/video") == "http://cam/video"


class TestOpenCamera:
    @pytest.fixture
    def linux(self, monkeypatch):
        monkeypatch.setattr(camera_service.sys, "platform", "linux")
        monkeypatch.setattr(camera_service.cv2.videoio_registry, "getCameraBackends", lambda: [200])

    def test_no_backend_is_unsupported(self, monkeypatch):
        monkeypatch.setattr(camera_service.cv2.videoio_registry, "getCameraBackends", lambda: [])
        with pytest.raises(CameraUnsupportedError):
            open_camera(0)

    def test_missing_device(self, linux, monkeypatch):
        monkeypatch.setattr(camera_service.os.path, "exists", lambda path: False)
        with pytest.raises(CameraNotFoundError):
            open_camera(0)

    def test_permission_denied(self, linux, monkeypatch):
        monkeypatch.setattr(camera_service.os.path, "exists", lambda path: True)
        monkeypatch.setattr(camera_service.os, "access", lambda path, mode: False)
        with pytest.raises(CameraPermissionError):
            open_camera(0)

    def test_unopened_capture(self, monkeypatch):
        class Closed:
            released = False

            def __init__(self, source):
                pass

            def isOpened(self):
                return False

            def release(self):
                Closed.released = True

        monkeypatch.setattr(camera_service.cv2, "VideoCapture", Closed)
        with pytest.raises(CameraError, match="cannot open stream"):
            open_camera("http://cam/video")
        assert Closed.released is True

    def test_requests_ideal_resolution(self, monkeypatch):
        props = {}

        class Opened:
            def __init__(self, source):
                pass

            def isOpened(self):
                return True

            def set(self, prop, value):
                props[prop] = value

        monkeypatch.setattr(camera_service.cv2, "VideoCapture", Opened)
        open_camera("http://cam/video", width=1280, height=720)
        assert props[camera_service.cv2.CAP_PROP_FRAME_WIDTH] == 1280
        assert props[camera_service.cv2.CAP_PROP_FRAME_HEIGHT] == 720


class TestCameraStream:
    def make_stream(self, frames, analyzer):
        capture = FakeCapture(frames)
        stream = CameraStream(0, analyzer, interval=0.005, opener=lambda source: capture)
        return stream, capture

    def test_publishes_detections(self, detection):
        frame = np.ones((48, 64, 3), dtype=np.uint8)
        stream, capture = self.make_stream([frame], FakeAnalyzer(result=[detection]))
        stream.start()
        try:
            result = wait_for(stream.take_result)
        finally:
            stream.stop()

        assert result is not None
        published, detections, error = result
        assert published.shape == (48, 64, 3)
        assert detections == [detection]
        assert error is None
        assert stream.video_ready.is_set()
        assert capture.released is True

    def test_detection_error_published(self):
        frame = np.ones((48, 64, 3), dtype=np.uint8)
        stream, _ = self.make_stream([frame], FakeAnalyzer(error=RuntimeError("model crashed")))
        stream.start()
        try:
            result = wait_for(stream.take_result)
        finally:
            stream.stop()

        _, detections, error = result
        assert detections == []
        assert str(error) == "model crashed"

    def test_no_frames_is_playback_error(self):
        stream, _ = self.make_stream([], FakeAnalyzer())
        stream.start()
        stream.thread_read.join(timeout=2.0)
        stream.stop()

        assert isinstance(stream.playback_error, CameraPlaybackError)
        assert not stream.video_ready.is_set()

    def test_frame_size_and_take_result(self):
        frame = np.ones((48, 64, 3), dtype=np.uint8)
        analyzer = FakeAnalyzer()
        analyzer.is_loaded = False
        stream, _ = self.make_stream([frame], analyzer)
        assert stream.frame_size() is None
        stream.start()
        try:
            assert wait_for(stream.video_ready.is_set)
            assert stream.frame_size() == (64, 48)
        finally:
            stream.stop()
        assert stream.take_result() is None

    def test_open_failure_propagates(self):
        def opener(source):
            raise CameraNotFoundError("/dev/video0 does not exist")

        stream = CameraStream(0, FakeAnalyzer(), opener=opener)
        with pytest.raises(CameraNotFoundError):
            stream.start()

    def test_read_latest_returns_copy(self):
        frame = np.ones((48, 64, 3), dtype=np.uint8)
        analyzer = FakeAnalyzer()
        analyzer.is_loaded = False
        stream, _ = self.make_stream([frame], analyzer)
        assert stream.read_latest() is None
        stream.start()
        try:
            assert wait_for(stream.video_ready.is_set)
            latest = stream.read_latest()
        finally:
            stream.stop()

        assert latest.shape == (48, 64, 3)
        latest[:] = 0
        assert stream.latest_frame[0].all()

    def test_stop_releases_blocked_reader(self):
        capture = BlockingCapture()
        stream = CameraStream(0, FakeAnalyzer(), interval=0.005, opener=lambda source: capture)
        stream.start()
        assert capture.reading.wait(timeout=2.0)

        stopper = threading.Thread(target=stream.stop)
        stopper.start()
        stopper.join(timeout=2.0)

        assert not stopper.is_alive()
        assert capture.released.is_set()
        assert stream.playback_error is None


class BlockingCapture:
    """Capture whose read() blocks until release(), like a stalled network stream"""

    def __init__(self):
        self.reading = threading.Event()
        self.released = threading.Event()

    def read(self):
        self.reading.set()
        self.released.wait()
        return False, None

    def release(self):
        self.released.set()
