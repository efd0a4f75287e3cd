# boxdetect

Post-processing for single-stage object detectors. It turns raw head output
tensors into scored bounding boxes in source-image coordinates, and it keeps
track of which model files and detection pipelines are available in a
deployment directory.

## Modules

- `boxdetect.geometry`: frozen `Point` and `Size` dataclasses and `norm`.
  A value whose coordinates are all `int` behaves as an integer type:
  arithmetic results are truncated towards zero. `Point` has `dot`, `ddot`,
  `cross` and `to_size`; `Size` has `area`, `aspect_ratio`, `empty` and
  `to_point`. Both support `+`, `-`, scalar `*` and `/`.
- `boxdetect.rect`: frozen `Rect(x, y, width, height)` with `area`, `empty`,
  `intersection` (also `&`) and `union` (also `|`). An empty intersection
  gives `Rect()`.
- `boxdetect.detection`: `DetectedObject`, `KeyPoint`, `PlateAttr`,
  `DetResult`, `GridAndStride`, and the functions `sigmoid`,
  `intersection_area`, `sort_by_score_descending` (returns a new list),
  `nms_sorted_bboxes` and `hvc_nms_sorted_bboxes` (both return the indices
  of the boxes kept; the latter works per class and also suppresses boxes
  contained in one another), `generate_grids_and_stride` and `nhwc_to_nchw`.
- `boxdetect.proposals`: decoders for raw head outputs:
  `generate_yolox_proposals`, `generate_proposals_yolov8` (distribution
  focal loss heads with 16 bins per side, boxes clamped to the letterbox),
  `generate_pico_proposals` (quantised uint8 PicoDet heads with 8 bins per
  side), the helpers `softmax_integral` and `dequant_softmax`, and
  `reverse_letterbox` and `get_out_bbox`, which sort by score, run NMS and
  map the kept boxes back to the source image (undoing letterbox padding or
  a plain stretch respectively), clamped to its bounds.
- `boxdetect.yolox`: `YoloXConfig` and `YoloXDecoder`. `YoloXDecoder` takes
  the network input size as `(height, width)`; `decode(outputs,
  image_width, image_height)` decodes output `i` with stride `8 * 2**i`
  through the YOLOv8 decoder over a 1024x576 letterbox by default, applies
  `reverse_letterbox` and keeps only `config.want_classes` when that list is
  not empty. `create_anchors(num_outputs)` builds the anchor grids from
  `config.strides`.
- `boxdetect.model_mgr`: `ModelManager`, `ModelInfo` and
  `get_model_version`. The manager is built with the keywords to look for;
  `init(path)` scans the files of a directory and records, for each keyword,
  the first file whose name contains it. The version is the part of the file
  name from the first `V` up to `.axmodel`, or `"unknown"`.
- `boxdetect.ppl_mgr`: `PipelineManager` and `PipelineConfig`. Given a
  `ModelManager` and a mapping from pipeline to required model keywords,
  `init()` collects the pipelines whose models are all present, each with a
  `keyword:version` key taken from its first model.
- `boxdetect.mem_mgr`: `MemoryRegistry` and `MemType`, a record of handed-out
  result buffers by address (`add`, `find`, `erase`).
- `boxdetect.errors`: `SkelError` and its subclasses
  `AlreadyInitializedError`, `NotInitializedError` and `IllegalParamError`.

## Installing

```
pip install .
```

The only runtime dependency is numpy.

## Examples

Non-maximum suppression over a few boxes:

```python
from boxdetect.rect import Rect
from boxdetect.detection import DetectedObject, sort_by_score_descending, nms_sorted_bboxes

boxes = [
    DetectedObject(rect=Rect(0, 0, 10, 10), label=0, prob=0.9),
    DetectedObject(rect=Rect(1, 1, 10, 10), label=0, prob=0.8),
    DetectedObject(rect=Rect(50, 50, 10, 10), label=0, prob=0.7),
]
ordered = sort_by_score_descending(boxes)
kept = nms_sorted_bboxes(ordered, 0.45)   # [0, 2]
```

Finding models and the pipelines they make available:

```python
from boxdetect.model_mgr import ModelManager
from boxdetect.ppl_mgr import PipelineManager

models = ModelManager(["yolov8", "plate"])
models.init("/opt/models")
info = models.find("yolov8")   # a ModelInfo, or None when nothing matched

pipelines = PipelineManager(models, {"hvcfp": ["yolov8"]})
pipelines.init()
for config in pipelines.capability():
    print(config.pipeline, config.config_key)
```

`init` raises `AlreadyInitializedError` when called twice;
`PipelineManager.init` raises `NotInitializedError` if the model manager has
not been initialised, as does `capability()` before `init`;
`ModelManager.init` raises `IllegalParamError` when the directory is missing
or cannot be opened.

## What it does not do

The package only handles what comes before and after a network runs. It does
not load model files, run inference, or crop and resize images; the caller
supplies the head outputs as arrays. `PipelineManager` reports which
pipelines could run but does not create or start them.

## Running the tests

```
pip install .[test]
pytest
```