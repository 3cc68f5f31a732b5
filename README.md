# tronkit

Building blocks for an RGB/IR hand-tracking rig on Linux: frame and camera
request types, command-line option parsing for the collector, controller and
playground tools, clipped-exposure ROI detection, camera exposure ROI
following, bitmap persistence of frames, composable sinks, per-camera frame
statistics, pointer overlay geometry and a uinput virtual pointer.

The package has no runtime dependencies beyond the Python standard library
and supports Python 3.10 and later.

## Frames

`tronkit.types` holds the shared value types: `Size`, `Rect`, `RoiResult`,
`PixelFormat` (`GRAY8`, `BGRA8`), `SensorKind`, `CaptureFormat`,
`FrameTimestamp`, `FrameMeta`, `Frame`, `OwnedFrame`, `CameraSelector` and
`CameraOpenRequest`.

A `Frame` is a read-only view over pixel bytes with a row stride. It checks
that the stride and data length fit its size, and `mirrored(horizontal,
vertical)` returns a logically mirrored view without copying. `pixel(x, y,
channel)` and `rows()` read in logical (mirrored) order; `raw()` returns the
physical storage.

```python
from tronkit.types import Frame, FrameMeta, PixelFormat, SensorKind, Size

meta = FrameMeta(id=1, sensor=SensorKind.IR, size=Size(3, 2))
frame = Frame(meta, PixelFormat.GRAY8, 3, bytes([1, 2, 3, 4, 5, 6]))
list(frame.mirrored(True, False).rows())  # [b'\x03\x02\x01', b'\x06\x05\x04']
```

## Camera requests and command-line options

`tronkit.config` parses camera options into a `CameraOpenRequest`:

```python
from tronkit.config import parse_size, parse_positive_u32, parse_capture_format

size = parse_size("640x480").to_size()
fps = parse_positive_u32("30")
fmt = parse_capture_format("mjpeg").to_capture_format()
```

`parse_size`, `parse_positive_u32` and `parse_capture_format` raise
`ValueError` for malformed or non-positive input. `add_camera_arguments`
adds `--camera`, `--camera-id` (alias `--device`), `--sensor`, `--format`,
`--size`, `--fps` and `--buffers` to an `argparse` parser, and
`camera_args_from_namespace` turns the parsed namespace into `CameraArgs`,
whose `open_request()` builds the request.

`tronkit.cli_collector`, `tronkit.cli_controller` and `tronkit.cli_playground`
each provide `build_parser()` and `parse_args(argv)` for their tool's options,
plus helpers that derive settings from the parsed arguments:

- `cli_collector`: `validate` (rejects negative depths and `--tof-serial`
  without `--stereo-calibration`), `rgb_request` (MJPEG at 640x480 unless
  given), `ir_request`, `camera_roi_update_interval`.
- `cli_controller`: `PointerMode`, `rgb_request`, `linux_pointer_config`.
- `cli_playground`: `rgb_request`, `ir_request`,
  `camera_roi_update_interval`, `pipeline_config`, `camera_roi_config`.

## ROI processing

- `tronkit.exposure_roi.ClippedExposureRoiDetector` finds the largest solid
  rectangle of pixels at or above a threshold in a Gray8 frame, optionally
  inside a candidate ROI, and pads it within the frame. It returns `None`
  when fewer than `min_pixels` pixels are clipped.
- `tronkit.camera_roi.CameraRoiDriver` turns an ROI into a camera exposure
  rectangle through a caller-supplied follower and pushes it to a camera
  control, skipping repeated rectangles and throttling updates.
- `tronkit.metadata.CameraStatsProcessor` tracks frame-to-frame delta, a
  once-a-second frame rate and frame age for a stream; `camera_delta_us`
  gives the RGB minus IR camera timestamp.

## Sinks and saving frames

`tronkit.sinks` provides `ComboSink` (fan-out to several sinks),
`ToggleSink` (forwards only while enabled) and `CameraRoiSink` (pushes an
aggregate's camera ROI to a camera control). `tronkit.aggregate.Aggregate`
is the synchronized RGB/IR result the collector passes to its sinks.

`tronkit.bmp.encode_bmp` and `tronkit.bmp.write_bmp` store BGRA8 and Gray8
frames as uncompressed top-down bitmaps in logical pixel order.
`tronkit.persistence.Persistence` writes the IR frame of each consumed
aggregate as `ir-<id>.bmp` into a freshly created temporary directory.

## Controller loop and pointer output

`tronkit.controller` has `ControllerFrame`, `PinchTransitionTracker`,
`ReplayPipeline` (one frame per step, stepping forward and back) and
`ControllerTicker` (live or replay). `tronkit.runtime.ControllerRuntime`
ticks frames, feeds gestures to a pointer-input queue, drains pointer output
into sinks, and `tronkit.runtime.run` loops until told to stop.

`tronkit.pointer.PointerOverlay` turns pointer events and joystick
visualisations into `ThickLine` segments in normalised device coordinates.
`tronkit.pointer.LinuxPointerSink` drives a `UinputPointerDevice` — a
`/dev/uinput` virtual mouse — with relative motion (keeping fractional
remainders) and left-button events.

## What this package does not do

It does not open cameras, decode MJPEG or capture frames, and it does not
talk to UVC extension units, so it cannot switch an IR emitter on or off.
It has no installed commands, no preview window or GPU rendering, no hand
detection or landmark models, and no HTTP metadata endpoint: the option
parsers and processing pieces are here, but wiring them to cameras, models
and a display is left to the application using them.