from inkpad.config import PadOptions
from inkpad.pad.controller import PadInputController
from inkpad.pad.ingestion.events import EventKind, InputEvent, SurfaceRect, pointer_type_of, sample_from_event
from inkpad.pad.ingestion.models import UNKNOWN
from inkpad.pad.recorder import SignaturePad
from conftest import RecordingSurface


def test_coordinates_are_relative_to_the_surface():
    event = InputEvent(clientX=110, clientY=60, timeStamp=42)
    sample = sample_from_event(event, SurfaceRect(left=100, top=50))
    assert (sample.x, sample.y, sample.time) == (10, 10, 42)


def test_pen_pointer_event_carries_pressure_tilt_and_twist():
    event = InputEvent(
        clientX=1, clientY=2, timeStamp=0, pointerType="pen",
        pressure=0.4, tiltX=10, tiltY=-5, twist=90,
    )
    sample = sample_from_event(event)
    assert sample.pressure == 0.4
    assert (sample.tilt_x, sample.tilt_y) == (10, -5)
    assert sample.rotation == 90
    assert sample.altitude == UNKNOWN


def test_mouse_pointer_event_has_no_device_channels():
    event = InputEvent(clientX=1, clientY=2, timeStamp=0, pointerType="mouse", pressure=0.5, tiltX=0, tiltY=0)
    sample = sample_from_event(event)
    assert sample.pressure == UNKNOWN
    assert sample.tilt_x == UNKNOWN


def test_touch_event_maps_force_and_angles():
    event = InputEvent(
        kind=EventKind.TOUCH, clientX=1, clientY=2, timeStamp=0,
        force=0.7, rotationAngle=12, altitudeAngle=1.2, azimuthAngle=0.3,
    )
    sample = sample_from_event(event)
    assert sample.pressure == 0.7
    assert sample.rotation == 12
    assert (sample.altitude, sample.azimuth) == (1.2, 0.3)
    assert sample.tilt_x == UNKNOWN
    assert pointer_type_of(event) == "touch"


def test_mouse_event_has_only_position():
    event = InputEvent(kind=EventKind.MOUSE, clientX=1, clientY=2, timeStamp=0, pressure=1)
    sample = sample_from_event(event)
    assert sample.pressure == UNKNOWN
    assert pointer_type_of(event) == "mouse"


def test_missing_timestamp_is_stamped_once_at_capture():
    sample = sample_from_event(InputEvent(clientX=0, clientY=0), clock=lambda: 1234.0)
    assert sample.time == 1234.0


def test_controller_drives_a_stroke():
    pad = SignaturePad(surface=RecordingSurface(), options=PadOptions(throttle_ms=0))
    controller = PadInputController(pad, SurfaceRect(left=10, top=10))

    assert controller.pointer_down(InputEvent(clientX=10, clientY=10, timeStamp=0, pointerType="pen", pointerId=7))
    assert not controller.pointer_down(InputEvent(clientX=99, clientY=99, timeStamp=1))
    controller.pointer_move(InputEvent(clientX=40, clientY=10, timeStamp=16))
    controller.pointer_move(InputEvent(clientX=70, clientY=30, timeStamp=32))
    controller.pointer_up(InputEvent(clientX=100, clientY=30, timeStamp=48))
    controller.pointer_move(InputEvent(clientX=150, clientY=30, timeStamp=64))

    groups = pad.to_data()
    assert len(groups) == 1
    assert [(s.x, s.y) for s in groups[0].points] == [(0, 0), (30, 0), (60, 20), (90, 20)]
    assert pad.device.pointer_type == "pen"
    assert pad.device.pointer_id == 7
    assert not pad.is_drawing


def test_mouse_pointer_events_export_without_device_channels():
    pad = SignaturePad(surface=RecordingSurface(), options=PadOptions(throttle_ms=0))
    controller = PadInputController(pad, SurfaceRect())

    controller.pointer_down(InputEvent(clientX=0, clientY=0, timeStamp=0, pointerType="mouse", tiltX=0, tiltY=0))
    controller.pointer_move(InputEvent(clientX=30, clientY=0, timeStamp=16, pointerType="mouse", tiltX=0, tiltY=0))
    controller.pointer_up(InputEvent(clientX=60, clientY=10, timeStamp=32, pointerType="mouse", tiltX=0, tiltY=0))

    rep = pad.to_biometric_data().to_json_dict()["root"]["rl"]["r"]
    assert rep["inc"] == "C120"
    assert rep["dev"]["tec"] == "mouse"
    for point in rep["spl"]["sp"]:
        assert "fc" not in point and "po" not in point
