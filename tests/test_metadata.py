import pytest

from tronkit.metadata import (
    CameraMetadata,
    CameraStatsProcessor,
    PlaygroundMetadata,
    PlaygroundPipelineConfig,
    camera_delta_us,
)
from tronkit.types import (
    FrameMeta,
    FrameTimestamp,
    OwnedFrame,
    PixelFormat,
    SensorKind,
    Size,
)


def owned(frame_id, received_at, camera_us=None, sensor=SensorKind.IR, sequence=None):
    meta = FrameMeta(
        id=frame_id,
        sensor=sensor,
        size=Size(1, 1),
        timestamp=FrameTimestamp(camera_monotonic_us=camera_us, received_at=received_at),
        sequence=sequence,
    )
    return OwnedFrame(meta=meta, format=PixelFormat.GRAY8, stride=1, data=bytearray(1))


def test_missing_frame_yields_empty_metadata():
    stats = CameraStatsProcessor(started_at=0.0)
    assert stats.process(None, 0.1) == CameraMetadata()


def test_first_frame_reports_identity_and_age():
    stats = CameraStatsProcessor(started_at=10.0)
    result = stats.process(owned(3, 10.0, camera_us=77, sequence=9), 10.5)
    assert result.sensor is SensorKind.IR
    assert result.frame_id == 3
    assert result.sequence == 9
    assert result.camera_monotonic_us == 77
    assert result.frame_delta_us is None
    assert result.age_us == 500000


def test_delta_uses_camera_timestamps_when_available():
    stats = CameraStatsProcessor(started_at=0.0)
    stats.process(owned(1, 0.0, camera_us=1000), 0.0)
    result = stats.process(owned(2, 0.9, camera_us=5000), 0.9)
    assert result.frame_delta_us == 5000 - 1000


def test_delta_falls_back_to_receive_time():
    stats = CameraStatsProcessor(started_at=0.0)
    stats.process(owned(1, 1.0), 1.0)
    result = stats.process(owned(2, 1.25), 1.25)
    assert result.frame_delta_us == 250000


def test_delta_is_none_when_received_earlier():
    stats = CameraStatsProcessor(started_at=0.0)
    stats.process(owned(1, 2.0), 2.0)
    result = stats.process(owned(2, 1.0), 2.0)
    assert result.frame_delta_us is None


def test_repeated_frame_keeps_previous_delta():
    stats = CameraStatsProcessor(started_at=0.0)
    stats.process(owned(1, 0.0, camera_us=100), 0.0)
    first = stats.process(owned(2, 0.1, camera_us=400), 0.1)
    again = stats.process(owned(2, 0.1, camera_us=400), 0.2)
    assert again.frame_delta_us == first.frame_delta_us


def test_missing_frame_keeps_last_delta():
    stats = CameraStatsProcessor(started_at=0.0)
    stats.process(owned(1, 0.0, camera_us=100), 0.0)
    seen = stats.process(owned(2, 0.1, camera_us=300), 0.1)
    empty = stats.process(None, 0.2)
    assert empty.frame_delta_us == seen.frame_delta_us
    assert empty.frame_id is None


def test_fps_after_one_second_window():
    stats = CameraStatsProcessor(started_at=0.0)
    assert stats.process(owned(1, 0.5), 0.5).fps is None
    result = stats.process(owned(2, 1.0), 1.0)
    assert result.fps == pytest.approx(2.0)


def test_fps_window_resets_and_counts_only_new_frames():
    stats = CameraStatsProcessor(started_at=0.0)
    stats.process(owned(1, 0.5), 1.0)
    first_fps = stats.process(None, 1.0).fps
    stats.process(owned(1, 0.5), 1.5)
    stats.process(owned(1, 0.5), 2.0)
    assert stats.process(None, 2.0).fps == pytest.approx(0.0)
    assert first_fps == pytest.approx(1.0)


def test_camera_delta_between_rgb_and_ir():
    rgb = owned(1, 0.0, camera_us=900, sensor=SensorKind.RGB)
    ir = owned(2, 0.0, camera_us=400)
    assert camera_delta_us(rgb, ir) == 900 - 400
    assert camera_delta_us(ir, rgb) == 400 - 900


@pytest.mark.parametrize(
    "rgb, ir",
    [
        (None, owned(1, 0.0, camera_us=1)),
        (owned(1, 0.0, camera_us=1), None),
        (owned(1, 0.0), owned(2, 0.0, camera_us=1)),
        (owned(1, 0.0, camera_us=1), owned(2, 0.0)),
    ],
)
def test_camera_delta_missing_parts(rgb, ir):
    assert camera_delta_us(rgb, ir) is None


def test_playground_metadata_default_parts_are_empty():
    metadata = PlaygroundMetadata()
    assert metadata.rgb == CameraMetadata()
    assert metadata.ir == CameraMetadata()
    assert metadata.rgb_ir_delta_us is None


def test_pipeline_config_overrides_keep_other_defaults():
    config = PlaygroundPipelineConfig(roi_threshold=10)
    assert config.roi_threshold == 10
    assert config.exposure_roi_threshold == 250
    assert config.rgb_mediapipe_model is None