"""Post-processing of detector outputs into boxes in source-image coordinates."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from boxdetect.detection import DetectedObject, GridAndStride, generate_grids_and_stride
from boxdetect.geometry import Size
from boxdetect.proposals import generate_proposals_yolov8, reverse_letterbox

LETTERBOX_COLS = 1024
LETTERBOX_ROWS = 576


@dataclass
class YoloXConfig:
    """Thresholds, strides and class filter of a detector."""

    strides: list[list[int]] = field(default_factory=list)
    cls_thresh: float = 0.0
    nms_thresh: float = 0.0
    min_size: Size = field(default_factory=Size)
    want_classes: list[int] = field(default_factory=list)
    zps: list[float] = field(default_factory=list)
    scales: list[float] = field(default_factory=list)
    num_classes: int = 80


class YoloXDecoder:
    """Turns raw head outputs of a detector into final detections.

    ``input_size`` is the network input as ``(height, width)``.
    """

    def __init__(
        self,
        config: YoloXConfig,
        input_size: tuple[int, int],
        letterbox_cols: int = LETTERBOX_COLS,
        letterbox_rows: int = LETTERBOX_ROWS,
    ) -> None:
        self.config = config
        self.input_size = tuple(input_size)
        self.letterbox_cols = letterbox_cols
        self.letterbox_rows = letterbox_rows
        self.anchors: list[list[GridAndStride]] = []
        self._anchors_created = False

    def create_anchors(self, num_outputs: int) -> list[list[GridAndStride]]:
        """Build the anchor grid of each output from the configured strides."""
        if num_outputs > len(self.config.strides):
            raise ValueError(
                f"{num_outputs} outputs but only {len(self.config.strides)} stride lists"
            )
        height, width = self.input_size
        self.anchors = [
            generate_grids_and_stride(width, height, strides)
            for strides in self.config.strides[:num_outputs]
        ]
        self._anchors_created = True
        return self.anchors

    def decode(
        self, outputs: Sequence, image_width: int, image_height: int
    ) -> list[DetectedObject]:
        """Detections for an image of the given size from the head outputs.

        Output ``i`` is decoded with stride ``8 * 2**i``; boxes are suppressed,
        mapped back to the image and filtered to the wanted classes.
        """
        if not self._anchors_created:
            self.create_anchors(len(outputs))

        config = self.config
        proposals: list[DetectedObject] = []
        for level, output in enumerate(outputs):
            proposals.extend(
                generate_proposals_yolov8(
                    (1 << level) * 8,
                    output,
                    config.cls_thresh,
                    self.letterbox_cols,
                    self.letterbox_rows,
                    config.num_classes,
                )
            )

        height, width = self.input_size
        objects = reverse_letterbox(
            proposals, config.nms_thresh, height, width, image_height, image_width
        )
        if config.want_classes:
            wanted = set(config.want_classes)
            objects = [obj for obj in objects if obj.label in wanted]
        return objects