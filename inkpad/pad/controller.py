from typing import Optional
from .ingestion.events import InputEvent, SurfaceRect, pointer_type_of, sample_from_event
from .recorder import SignaturePad


class PadInputController:
    """
    Routes down/move/up input events to a SignaturePad. Only one stroke is
    active at a time; a second down while the button is held is ignored.
    """

    def __init__(self, pad: SignaturePad, rect: Optional[SurfaceRect] = None):
        self.pad = pad
        self.rect = rect or SurfaceRect()
        self.button_down = False

    def pointer_down(self, event: InputEvent) -> bool:
        if self.button_down:
            return False
        self.button_down = True
        return self.pad.begin_stroke(
            sample=sample_from_event(event, self.rect),
            pointer_type=pointer_type_of(event),
            pointer_id=event.pointerId,
        )

    def pointer_move(self, event: InputEvent):
        if self.button_down:
            self.pad.stroke_move(sample_from_event(event, self.rect))

    def pointer_up(self, event: InputEvent):
        if not self.button_down:
            return
        self.button_down = False
        self.pad.end_stroke(sample_from_event(event, self.rect))
