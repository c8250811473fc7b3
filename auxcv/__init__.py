"""Letterbox preprocessing, YOLO detection decoding with NMS, and pose keypoint decoding."""

__version__ = "0.3.6"
__all__ = ["atomic", "detect", "nms", "padding", "pose", "preprocess", "props"]