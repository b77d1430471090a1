"""
Biometric export.

Maps a drawing to a normalized, device-agnostic sample stream for signature
verification systems: positions in millimetres, scaled time, pressure and
pen orientation channels, and a header that records which channels are
populated. Short keys keep the JSON form compact; the XML form uses the
long sig:/cmn: element names.
"""
from typing import Dict, List, Optional, Set
from datetime import datetime
import xml.etree.ElementTree as ET
from pydantic import BaseModel
from ...config import PadOptions
from ..ingestion.models import PointGroup, Sample, UNKNOWN

# Vendor/organization code recorded in the capture device id
DEVICE_ORGANIZATION = 259

# X Y Z VX VY AX AY T DT F S TX TY A E R
INCLUSION_BITS = {
    "x": 1 << 15,
    "y": 1 << 14,
    "z": 1 << 13,
    "vx": 1 << 12,
    "vy": 1 << 11,
    "ax": 1 << 10,
    "ay": 1 << 9,
    "time": 1 << 8,
    "duration": 1 << 7,
    "pressure": 1 << 6,
    "scale": 1 << 5,
    "tilt_x": 1 << 4,
    "tilt_y": 1 << 3,
    "azimuth": 1 << 2,
    "altitude": 1 << 1,
    "rotation": 1 << 0,
}

ALWAYS_INCLUDED = ("x", "y", "time", "scale")

# Only these devices report pressure and orientation
DEVICE_CHANNEL_POINTER_TYPES = ("pen", "touch")

DEVICE_TECHNOLOGY = {
    "pen": "Electromagnetic",
}

OPTIONAL_CHANNELS = ("pressure", "tilt_x", "tilt_y", "azimuth", "altitude", "rotation")

XML_NAMES = {
    "cx": "cmn:X",
    "cy": "cmn:Y",
    "tax": "sig:TiltAlongX",
    "tay": "sig:TiltAlongY",
    "pa": "sig:PenAzimuth",
    "pe": "sig:PenElevation",
    "pr": "sig:PenRotation",
    "tc": "sig:TimeChannel",
    "ptc": "sig:PenTipCoord",
    "fc": "sig:FChannel",
    "po": "sig:PenOrient",
    "maj": "cmn:Major",
    "min": "cmn:Minor",
    "org": "cmn:Organization",
    "ident": "cmn:Identifier",
    "did": "sig:DeviceID",
    "tec": "sig:DeviceTechnology",
    "scVal": "sig:ScalingValue",
    "minVal": "sig:MinChannelValue",
    "maxVal": "sig:MaxChannelValue",
    "sp": "sig:SamplePoint",
    "dt": "sig:CaptureDateAndTime",
    "dev": "sig:CaptureDevice",
    "inc": "sig:InclusionField",
    "cdl": "sig:ChannelDescriptionList",
    "spl": "sig:SamplePointList",
    "r": "sig:Representation",
    "typecode": "cmn:TypeCode",
    "data": "cmn:Data",
    "v": "sig:Version",
    "rl": "sig:RepresentationList",
    "vsd": "sig:VendorSpecificData",
    "root": "sig:SignatureSignTimeSeries",
}


class PenTipCoord(BaseModel):
    cx: float
    cy: float


class PenOrient(BaseModel):
    tax: Optional[int] = None
    tay: Optional[int] = None
    pa: Optional[int] = None
    pe: Optional[int] = None
    pr: Optional[int] = None


class BiometricPoint(BaseModel):
    tc: float
    ptc: PenTipCoord
    fc: Optional[int] = None
    po: Optional[PenOrient] = None


class Version(BaseModel):
    maj: int = 1
    min: int = 0


class CaptureDeviceID(BaseModel):
    org: int = DEVICE_ORGANIZATION
    ident: str = "0"


class CaptureDevice(BaseModel):
    did: CaptureDeviceID
    tec: str


class ChannelDescription(BaseModel):
    scVal: float
    minVal: float
    maxVal: float


class SamplePointList(BaseModel):
    sp: List[BiometricPoint]


class Representation(BaseModel):
    dt: str
    dev: CaptureDevice
    inc: str
    cdl: Dict[str, ChannelDescription]
    spl: SamplePointList


class RepresentationList(BaseModel):
    r: Representation


class VendorSpecificData(BaseModel):
    typecode: int = 1
    data: str = ""


class BiometricSignature(BaseModel):
    v: Version = Version()
    rl: RepresentationList
    vsd: VendorSpecificData = VendorSpecificData()


class BiometricDocument(BaseModel):
    root: BiometricSignature

    def to_json_dict(self) -> dict:
        return self.model_dump(exclude_none=True)


class DeviceInfo(BaseModel):
    pointer_type: str = "mouse"
    pointer_id: int = 0


def populated_channels(point_groups: List[PointGroup]) -> Set[str]:
    """Optional channels for which at least one sample carries a real value."""
    found = set()
    for group in point_groups:
        for sample in group.points:
            for channel in OPTIONAL_CHANNELS:
                if getattr(sample, channel) != UNKNOWN:
                    found.add(channel)
    return found


def inclusion_field(channels: Set[str]) -> int:
    inclusion = 0
    for name in ALWAYS_INCLUDED:
        inclusion |= INCLUSION_BITS[name]
    for name in channels:
        inclusion |= INCLUSION_BITS[name]
    return inclusion


def _scaled(sample: Sample, channel: str, channels: Set[str], scale: int) -> Optional[int]:
    if channel not in channels:
        return None
    return round(getattr(sample, channel) * scale)


def biometric_point(sample: Sample, start_time: float, channels: Set[str], options: PadOptions) -> BiometricPoint:
    angle = options.angle_scale
    point = BiometricPoint(
        tc=(sample.time - start_time) * options.time_scale / 1000,
        ptc=PenTipCoord(
            cx=round(sample.x / options.pixels_per_mm, 2),
            cy=round(sample.y / options.pixels_per_mm, 2),
        ),
        fc=_scaled(sample, "pressure", channels, options.pressure_scale),
    )
    if channels - {"pressure"}:
        point.po = PenOrient(
            tax=_scaled(sample, "tilt_x", channels, angle),
            tay=_scaled(sample, "tilt_y", channels, angle),
            pa=_scaled(sample, "azimuth", channels, angle),
            pe=_scaled(sample, "altitude", channels, angle),
            pr=_scaled(sample, "rotation", channels, angle),
        )
    return point


def to_biometric_data(
    point_groups: List[PointGroup],
    options: PadOptions,
    started_at: datetime,
    device: Optional[DeviceInfo] = None,
) -> BiometricDocument:
    device = device or DeviceInfo()
    samples = [s for group in point_groups for s in group.points]
    if device.pointer_type in DEVICE_CHANNEL_POINTER_TYPES:
        channels = populated_channels(point_groups)
    else:
        channels = set()

    start_time = samples[0].time if samples else 0.0
    duration = (samples[-1].time - start_time) if samples else 0.0

    points = [biometric_point(s, start_time, channels, options) for s in samples]

    cdl = {
        "sig:PenTipOrientationChannelDescription": ChannelDescription(
            scVal=options.angle_scale, minVal=0, maxVal=90 * options.angle_scale,
        ),
        "sig:TChannelDescription": ChannelDescription(
            scVal=options.time_scale, minVal=0, maxVal=duration * options.time_scale / 1000,
        ),
        "sig:FChannelDescription": ChannelDescription(
            scVal=options.pressure_scale, minVal=0, maxVal=options.pressure_scale,
        ),
    }

    representation = Representation(
        dt=started_at.isoformat(),
        dev=CaptureDevice(
            did=CaptureDeviceID(org=DEVICE_ORGANIZATION, ident=str(device.pointer_id)),
            tec=DEVICE_TECHNOLOGY.get(device.pointer_type, device.pointer_type),
        ),
        inc=format(inclusion_field(channels), "X"),
        cdl=cdl,
        spl=SamplePointList(sp=points),
    )
    return BiometricDocument(root=BiometricSignature(rl=RepresentationList(r=representation)))


def _text(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _append(parent: ET.Element, key: str, value):
    tag = XML_NAMES.get(key, key)
    if isinstance(value, list):
        for item in value:
            _append(parent, key, item)
    elif isinstance(value, dict):
        element = ET.SubElement(parent, tag)
        for k, v in value.items():
            _append(element, k, v)
    else:
        ET.SubElement(parent, tag).text = _text(value)


def to_biometric_xml(document: BiometricDocument) -> str:
    data = document.to_json_dict()
    root = ET.Element(XML_NAMES["root"])
    for key, value in data["root"].items():
        _append(root, key, value)
    ET.indent(root, space="\t")
    return ET.tostring(root, encoding="unicode")
