import logging
from typing import Optional
from ..ingestion.models import Sample

logger = logging.getLogger("inkpad.admission")


def is_too_close(sample: Sample, last: Optional[Sample], min_distance: float) -> bool:
    """
    Jitter suppression: a sample within min_distance of the last admitted
    sample of the group is dropped. Rejected samples are lost, not merged.
    """
    if last is None:
        return False
    return sample.distance_to(last) <= min_distance


def admit(sample: Sample, last: Optional[Sample], min_distance: float) -> bool:
    if is_too_close(sample, last, min_distance):
        logger.debug("Dropped sample (%.2f, %.2f) closer than %s to last point", sample.x, sample.y, min_distance)
        return False
    return True
