import numpy as np
import pytest

from boxdetect.yolox import LETTERBOX_COLS, LETTERBOX_ROWS, YoloXConfig, YoloXDecoder


def _output(hits, num_classes=2):
    feat = np.full((4, num_classes + 64), -100.0)
    for k in range(4):
        feat[:, k * 16] = 100.0
    feat[:, 64:] = -5.0
    for cell, label in hits.items():
        feat[cell, 64 + label] = 5.0
    return feat.ravel()


def _decoder(**overrides):
    config = YoloXConfig(strides=[[8]], cls_thresh=0.5, nms_thresh=0.45, num_classes=2)
    for key, value in overrides.items():
        setattr(config, key, value)
    return YoloXDecoder(config, (16, 16), letterbox_cols=16, letterbox_rows=16)


def test_create_anchors_per_output():
    config = YoloXConfig(strides=[[8], [16], [32]])
    decoder = YoloXDecoder(config, (64, 64))
    anchors = decoder.create_anchors(3)
    assert [len(level) for level in anchors] == [(64 // s) ** 2 for s in (8, 16, 32)]
    assert {gs.stride for gs in anchors[1]} == {16}


def test_create_anchors_needs_enough_strides():
    decoder = YoloXDecoder(YoloXConfig(strides=[[8]]), (64, 64))
    with pytest.raises(ValueError):
        decoder.create_anchors(2)


def test_decode_creates_anchors_lazily():
    decoder = _decoder()
    assert decoder.anchors == []
    decoder.decode([_output({})], 16, 16)
    assert len(decoder.anchors) == 1
    assert len(decoder.anchors[0]) == (16 // 8) ** 2


def test_decode_returns_all_classes_without_filter():
    decoder = _decoder()
    objects = decoder.decode([_output({0: 0, 3: 1})], 16, 16)
    assert sorted(obj.label for obj in objects) == [0, 1]
    for obj in objects:
        assert obj.iou_rect == obj.rect


def test_decode_filters_wanted_classes():
    decoder = _decoder(want_classes=[1])
    objects = decoder.decode([_output({0: 0, 3: 1})], 16, 16)
    assert [obj.label for obj in objects] == [1]


def test_decode_uses_default_letterbox():
    config = YoloXConfig(strides=[[8]], cls_thresh=0.6, nms_thresh=0.45)
    decoder = YoloXDecoder(config, (LETTERBOX_ROWS, LETTERBOX_COLS))
    cells = (LETTERBOX_COLS // 8) * (LETTERBOX_ROWS // 8)
    size = cells * (80 + 64)
    with pytest.raises(ValueError):
        decoder.decode([np.zeros(size - 1, dtype=np.float32)], 1920, 1080)
    assert decoder.decode([np.zeros(size, dtype=np.float32)], 1920, 1080) == []