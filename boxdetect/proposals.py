"""Decoding of raw detector outputs into box proposals and final boxes."""

from __future__ import annotations

import copy
import math
from collections.abc import Sequence

import numpy as np

from boxdetect.detection import (
    DetectedObject,
    GridAndStride,
    nms_sorted_bboxes,
    sigmoid,
    sort_by_score_descending,
)
from boxdetect.geometry import Size
from boxdetect.rect import Rect

FLT_MAX = float(np.finfo(np.float32).max)

_YOLOV8_REG_MAX = 16
_PICO_REG_MAX = 8
_EPSILON = 1e-9


def _sqrt(value: float) -> float:
    """Square root that yields NaN for negative input instead of raising."""
    return math.sqrt(value) if value >= 0 else math.nan


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _clamp(value: float, upper: float) -> float:
    return max(min(value, upper), 0.0)


def _as_float_array(values) -> np.ndarray:
    return np.asarray(values, dtype=np.float64).ravel()


def _as_uint8_array(values) -> np.ndarray:
    if isinstance(values, (bytes, bytearray, memoryview)):
        return np.frombuffer(values, dtype=np.uint8)
    return np.asarray(values, dtype=np.uint8).ravel()


def _box_from_ltrb(cx: float, cy: float, ltrb: Sequence[float]) -> tuple[float, float, float, float]:
    left, top, right, bottom = ltrb
    return cx - left, cy - top, cx + right, cy + bottom


def generate_yolox_proposals(
    grid_strides: Sequence[GridAndStride],
    feat,
    shape: Sequence[int],
    cls_thresh: float,
    min_size: Size,
) -> list[DetectedObject]:
    """Proposals from a YOLOX head laid out as ``x, y, w, h, obj, cls...`` planes.

    ``shape`` is the NCHW shape of the output; only its channel, height and
    width entries are used.
    """
    channels, height, width = shape[1], shape[2], shape[3]
    plane = height * width
    num_classes = channels - 5
    data = _as_float_array(feat)
    if channels < 5:
        raise ValueError(f"expected at least 5 channels, got {channels}")
    if data.size < channels * plane:
        raise ValueError(f"expected {channels * plane} values, got {data.size}")
    if len(grid_strides) > plane:
        raise ValueError(f"{len(grid_strides)} anchors do not fit in a {height}x{width} plane")

    planes = data[: channels * plane].reshape(channels, plane)
    objects: list[DetectedObject] = []
    for idx, gs in enumerate(grid_strides):
        objectness = float(planes[4, idx])
        x_center = (float(planes[0, idx]) + gs.grid0) * gs.stride
        y_center = (float(planes[1, idx]) + gs.grid1) * gs.stride
        w = math.exp(float(planes[2, idx])) * gs.stride
        h = math.exp(float(planes[3, idx])) * gs.stride
        x0 = x_center - w * 0.5
        y0 = y_center - h * 0.5
        if w < min_size.width or h < min_size.height:
            continue
        for class_idx in range(num_classes):
            box_prob = objectness * float(planes[5 + class_idx, idx])
            if box_prob > cls_thresh:
                objects.append(
                    DetectedObject(rect=Rect(x0, y0, w, h), label=class_idx, prob=box_prob)
                )
    return objects


def softmax_integral(values) -> float:
    """Expected bin index ``sum(i * p_i)`` under the softmax of ``values``."""
    arr = _as_float_array(values)
    if arr.size == 0:
        raise ValueError("softmax of an empty sequence")
    exps = np.exp(arr - arr.max())
    probs = exps / exps.sum()
    return float(np.dot(np.arange(arr.size), probs))


def generate_proposals_yolov8(
    stride: int,
    feat,
    prob_threshold: float,
    letterbox_cols: int,
    letterbox_rows: int,
    num_classes: int = 80,
) -> list[DetectedObject]:
    """Proposals from a YOLOv8 head with distribution-focal box regression.

    Each cell holds ``4 * 16`` box logits followed by ``num_classes`` scores.
    Boxes are clamped to the letterbox.
    """
    feat_w = letterbox_cols // stride
    feat_h = letterbox_rows // stride
    reg = _YOLOV8_REG_MAX
    channels = num_classes + 4 * reg
    cells = feat_w * feat_h
    data = _as_float_array(feat)
    if data.size < cells * channels:
        raise ValueError(f"expected {cells * channels} values, got {data.size}")
    grid = data[: cells * channels].reshape(cells, channels)

    if num_classes > 0:
        class_scores = grid[:, 4 * reg:]
        labels = class_scores.argmax(axis=1)
        scores = class_scores[np.arange(cells), labels]
    else:
        labels = np.zeros(cells, dtype=np.int64)
        scores = np.full(cells, -FLT_MAX)

    max_x = float(letterbox_cols - 1)
    max_y = float(letterbox_rows - 1)
    objects: list[DetectedObject] = []
    for cell, (label, score) in enumerate(zip(labels, scores)):
        box_prob = sigmoid(float(score))
        if not box_prob > prob_threshold:
            continue
        row, col = divmod(cell, feat_w)
        ltrb = [
            softmax_integral(grid[cell, k * reg:(k + 1) * reg]) * stride for k in range(4)
        ]
        x0, y0, x1, y1 = _box_from_ltrb((col + 0.5) * stride, (row + 0.5) * stride, ltrb)
        x0, x1 = _clamp(x0, max_x), _clamp(x1, max_x)
        y0, y1 = _clamp(y0, max_y), _clamp(y1, max_y)
        objects.append(
            DetectedObject(rect=Rect(x0, y0, x1 - x0, y1 - y0), label=int(label), prob=box_prob)
        )
    return objects


def dequant_softmax(values, zero_point: float, scale: float) -> np.ndarray:
    """Softmax of quantised values after ``(v - zero_point) * scale``."""
    arr = _as_uint8_array(values).astype(np.float64)
    if arr.size == 0:
        raise ValueError("softmax of an empty sequence")
    real = (arr - zero_point) * scale
    exps = np.exp(real - real.max())
    return exps / exps.sum()


def generate_pico_proposals(
    pred,
    stride: int,
    model_h: int,
    model_w: int,
    prob_threshold: float,
    num_classes: int = 80,
    scale: float = 1.0,
    zero_point: float = 0.0,
) -> list[DetectedObject]:
    """Proposals from a quantised PicoDet head in NHWC layout.

    Each cell holds ``num_classes`` uint8 scores followed by ``4 * 8`` box
    distribution values. Boxes are not clamped.
    """
    threshold = _sqrt(prob_threshold * prob_threshold / scale + zero_point + _EPSILON)
    num_grid_x = model_w // stride
    num_grid_y = model_h // stride
    reg = _PICO_REG_MAX
    channels = num_classes + reg * 4
    cells = num_grid_x * num_grid_y
    data = _as_uint8_array(pred)
    if data.size < cells * channels:
        raise ValueError(f"expected {cells * channels} values, got {data.size}")
    grid = data[: cells * channels].reshape(cells, channels)
    bins = np.arange(reg)

    objects: list[DetectedObject] = []
    for cell, values in enumerate(grid):
        if num_classes > 0:
            label = int(np.argmax(values[:num_classes]))
            raw = float(values[label])
        else:
            label, raw = -1, -FLT_MAX
        score = _sqrt(raw + _EPSILON)
        if not score >= threshold:
            continue
        offset = num_classes
        ltrb = [
            float(np.dot(bins, dequant_softmax(values[offset + k * reg: offset + (k + 1) * reg],
                                                zero_point, scale))) * stride
            for k in range(4)
        ]
        row, col = divmod(cell, num_grid_x)
        x0, y0, x1, y1 = _box_from_ltrb((col + 0.5) * stride, (row + 0.5) * stride, ltrb)
        objects.append(
            DetectedObject(
                rect=Rect(x0, y0, x1 - x0, y1 - y0),
                label=label,
                prob=_sqrt((score * score - zero_point) * scale),
            )
        )
    return objects


def _placed(obj: DetectedObject, x0: float, y0: float, x1: float, y1: float,
            src_rows: int, src_cols: int) -> DetectedObject:
    max_x = float(src_cols - 1)
    max_y = float(src_rows - 1)
    x0, x1 = _clamp(x0, max_x), _clamp(x1, max_x)
    y0, y1 = _clamp(y0, max_y), _clamp(y1, max_y)
    result = copy.deepcopy(obj)
    result.rect = Rect(x0, y0, x1 - x0, y1 - y0)
    result.iou_rect = result.rect
    return result


def _suppressed(proposals: Sequence[DetectedObject], nms_threshold: float) -> list[DetectedObject]:
    ordered = sort_by_score_descending(proposals)
    return [ordered[i] for i in nms_sorted_bboxes(ordered, nms_threshold)]


def reverse_letterbox(
    proposals: Sequence[DetectedObject],
    nms_threshold: float,
    letterbox_rows: int,
    letterbox_cols: int,
    src_rows: int,
    src_cols: int,
) -> list[DetectedObject]:
    """Suppress overlaps and map boxes from a padded letterbox back to the source image."""
    if src_rows <= 0 or src_cols <= 0:
        raise ValueError("source image size must be positive")
    row_scale = letterbox_rows / src_rows
    col_scale = letterbox_cols / src_cols
    scale = np.float32(row_scale if row_scale < col_scale else col_scale)
    resize_cols = int(scale * np.float32(src_cols))
    resize_rows = int(scale * np.float32(src_rows))
    if resize_cols <= 0 or resize_rows <= 0:
        raise ValueError("letterbox is too small for the source image")
    pad_h = _trunc_div(letterbox_rows - resize_rows, 2)
    pad_w = _trunc_div(letterbox_cols - resize_cols, 2)
    ratio_x = src_cols / resize_cols
    ratio_y = src_rows / resize_rows

    results = []
    for obj in _suppressed(proposals, nms_threshold):
        r = obj.rect
        results.append(
            _placed(
                obj,
                (r.x - pad_w) * ratio_x,
                (r.y - pad_h) * ratio_y,
                (r.x + r.width - pad_w) * ratio_x,
                (r.y + r.height - pad_h) * ratio_y,
                src_rows,
                src_cols,
            )
        )
    return results


def get_out_bbox(
    proposals: Sequence[DetectedObject],
    nms_threshold: float,
    letterbox_rows: int,
    letterbox_cols: int,
    src_rows: int,
    src_cols: int,
) -> list[DetectedObject]:
    """Suppress overlaps and stretch boxes from the network input to the source image."""
    if letterbox_rows <= 0 or letterbox_cols <= 0:
        raise ValueError("network input size must be positive")
    ratio_x = src_cols / letterbox_cols
    ratio_y = src_rows / letterbox_rows

    results = []
    for obj in _suppressed(proposals, nms_threshold):
        r = obj.rect
        results.append(
            _placed(
                obj,
                r.x * ratio_x,
                r.y * ratio_y,
                (r.x + r.width) * ratio_x,
                (r.y + r.height) * ratio_y,
                src_rows,
                src_cols,
            )
        )
    return results