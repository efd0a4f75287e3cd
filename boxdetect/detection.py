"""Detected objects, score ordering and non-maximum suppression."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import numpy as np

from boxdetect.rect import Rect


@dataclass(frozen=True)
class GridAndStride:
    """One anchor cell: its grid column, grid row and stride."""

    grid0: int
    grid1: int
    stride: int


@dataclass
class KeyPoint:
    """A key point of a detected object with its confidence."""

    x: float = 0.0
    y: float = 0.0
    score: float = 0.0


@dataclass
class PlateAttr:
    """Attributes of a licence plate found on an object."""

    count: int = 0
    valid: bool = False
    score: float = 0.0
    rect: Rect = field(default_factory=Rect)
    plate_license: str = ""
    no_repeat_blank_label: list[int] = field(default_factory=list)


@dataclass
class DetectedObject:
    """A detection: its box, class label, score and tracking data."""

    rect: Rect = field(default_factory=Rect)
    iou_rect: Rect = field(default_factory=Rect)
    master_rect: Rect = field(default_factory=Rect)
    label: int = 0
    prob: float = 0.0
    points: list[KeyPoint] = field(default_factory=list)
    boxes: list[float] = field(default_factory=list)
    angle: float = 0.0
    object_id: int = 0
    bind_track_id: int = 0
    exist_plate: bool = False
    plate_attr: PlateAttr = field(default_factory=PlateAttr)


@dataclass
class DetResult:
    """A compact detection result: class, score and integer box."""

    cls: int = 0
    prob: float = 0.0
    bbox: Rect = field(default_factory=Rect)


def sigmoid(x: float) -> float:
    """The logistic function ``1 / (1 + exp(-x))``."""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    e = math.exp(x)
    return e / (1.0 + e)


def intersection_area(a: DetectedObject, b: DetectedObject) -> float:
    """Area of the overlap of the boxes of two objects."""
    return (a.rect & b.rect).area()


def sort_by_score_descending(objects: Iterable[DetectedObject]) -> list[DetectedObject]:
    """The objects ordered from the highest score to the lowest."""
    return sorted(objects, key=lambda obj: obj.prob, reverse=True)


def _iou_above(inter: float, union: float, threshold: float) -> bool:
    # A zero union yields NaN in floating point, which never exceeds a threshold.
    if union == 0:
        return False
    return inter / union > threshold


def nms_sorted_bboxes(objects: Sequence[DetectedObject], nms_threshold: float) -> list[int]:
    """Indices of objects kept by greedy IoU suppression of score-sorted boxes."""
    areas = [obj.rect.area() for obj in objects]
    picked: list[int] = []
    for i, candidate in enumerate(objects):
        keep = True
        for j in picked:
            inter = intersection_area(candidate, objects[j])
            if _iou_above(inter, areas[i] + areas[j] - inter, nms_threshold):
                keep = False
        if keep:
            picked.append(i)
    return picked


def hvc_nms_sorted_bboxes(
    objects: Sequence[DetectedObject],
    nms_threshold: float,
    overlap_ratio: float,
    num_classes: int,
) -> list[int]:
    """Per-class suppression by IoU and by containment of one box in another.

    Indices are grouped by class, in class order, and within a class in the
    order of ``objects``. Objects whose label is outside ``range(num_classes)``
    are never picked.
    """
    areas = [obj.rect.area() for obj in objects]
    picked: list[int] = []
    for cls in range(num_classes):
        for i, candidate in enumerate(objects):
            if candidate.label != cls:
                continue
            keep = True
            for j in picked:
                other = objects[j]
                if other.label != cls:
                    continue
                inter = intersection_area(candidate, other)
                if _iou_above(inter, areas[i] + areas[j] - inter, nms_threshold):
                    keep = False
                if inter > overlap_ratio * areas[i] or inter > overlap_ratio * areas[j]:
                    keep = False
            if keep:
                picked.append(i)
    return picked


def generate_grids_and_stride(
    target_w: int, target_h: int, strides: Iterable[int]
) -> list[GridAndStride]:
    """Anchor cells for each stride, row by row, columns varying fastest."""
    return [
        GridAndStride(g0, g1, stride)
        for stride in strides
        for g1 in range(target_h // stride)
        for g0 in range(target_w // stride)
    ]


def nhwc_to_nchw(src: Sequence[float] | np.ndarray, n: int, h: int, w: int, c: int) -> np.ndarray:
    """Rearrange ``n*h*w*c`` values from NHWC order into an NCHW array."""
    data = np.asarray(src, dtype=np.float32)
    if data.size != n * h * w * c:
        raise ValueError(f"expected {n * h * w * c} values, got {data.size}")
    return np.ascontiguousarray(data.reshape(n, h, w, c).transpose(0, 3, 1, 2))