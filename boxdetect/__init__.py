"""Detector output decoding, box geometry, NMS and model/pipeline registries."""

__version__ = "0.1.0"

__all__ = [
    "detection",
    "errors",
    "geometry",
    "mem_mgr",
    "model_mgr",
    "ppl_mgr",
    "proposals",
    "rect",
    "yolox",
]