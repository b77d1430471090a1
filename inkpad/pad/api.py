from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response
from ..config import PadOptions
from .errors import UnsupportedImageFormat
from .ingestion.models import DrawingRequest
from .recorder import SignaturePad
from .stroke_engine.replay import CollectingSink, replay
from .export.raster import encode_image

router = APIRouter(prefix="/api/v1/pad", tags=["pad"])


def _pad_for(request: DrawingRequest) -> SignaturePad:
    options = request.options or PadOptions.from_env()
    pad = SignaturePad(options=options, width=request.width, height=request.height)
    pad.from_data(request.point_groups)
    return pad


@router.post("/replay")
async def replay_drawing(request: DrawingRequest):
    """
    Fits the drawing and returns the emitted dots and segments in order.
    """
    options = request.options or PadOptions.from_env()
    sink = CollectingSink()
    replay(request.point_groups, options, sink)

    events = []
    for kind, item, color in sink.events:
        events.append({"type": kind, "color": color, **item.model_dump()})

    return {
        "segment_count": len(sink.segments),
        "dot_count": len(sink.dots),
        "events": events,
    }


@router.post("/svg")
async def export_svg(request: DrawingRequest):
    pad = _pad_for(request)
    return Response(content=pad.to_svg(), media_type="image/svg+xml")


@router.post("/image")
async def export_image(request: DrawingRequest, format: str = Query("png"), trim: bool = Query(False)):
    """
    Renders the drawing to a raster image (png or jpeg), optionally cropped
    to the inked area.
    """
    mime_type = f"image/{format.lower()}"
    pad = _pad_for(request)
    try:
        image = pad.surface.trimmed() if trim else pad.surface.image
        data = encode_image(image, mime_type)
    except UnsupportedImageFormat as e:
        raise HTTPException(status_code=400, detail=str(e))
    return Response(content=data, media_type=mime_type)


@router.post("/biometric")
async def export_biometric(request: DrawingRequest):
    pad = _pad_for(request)
    return pad.to_biometric_data().to_json_dict()


@router.post("/biometric/xml")
async def export_biometric_xml(request: DrawingRequest):
    pad = _pad_for(request)
    return Response(content=pad.to_biometric_xml(), media_type="application/xml")
