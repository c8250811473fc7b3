# auxcv

Helpers for the steps before and after running a vision model: letterbox
resizing with normalisation, decoding of YOLO detection outputs with
class-wise non-maximum suppression, and keypoint decoding for pose models.
Everything works on NumPy arrays.

## Installation

```
pip install auxcv
```

## Letterbox geometry

`auxcv.padding` computes how an image of `src_w x src_h` fits into a target
of `width x height` while keeping its aspect ratio:

- `get_auto_resize(src_w, src_h, width, height)` returns `(scale, new_w, new_h)`.
- `get_padding(src_w, src_h, width, height)` returns
  `(scale, pad_left, pad_top, pad_right, pad_bottom)` for a centred letterbox.

A non-positive target size raises `ValueError`.

## Preprocessing

Each function in `auxcv.preprocess` reads an `H x W x 3` BGR `uint8` image,
resizes it by nearest-neighbour sampling, normalises it and writes it, as RGB
planes, into a preallocated `3 x H' x W'` `float32` array. Only the resized
region of the destination is written; the padding around it is left as it
was, so fill the array first if the padding must hold a particular value.
Each function returns `(scale, pad_left, pad_top)`, which maps model
coordinates back to the source image.

```python
import numpy as np
from auxcv.preprocess import yolov5_det_preprocess

image = np.zeros((480, 640, 3), dtype=np.uint8)
blob = np.zeros((3, 640, 640), dtype=np.float32)
scale, pad_left, pad_top = yolov5_det_preprocess(image, blob)
```

- `yolov5_det_preprocess(src, dst)` scales pixel values to `[0, 1]`.
- `yolov5_cls_preprocess(src, dst)` applies ImageNet mean and standard deviation.
- `std_preprocess(src, dst, mean_val, std_val)` applies your own per-channel
  mean and standard deviation, given in BGR order.
- `rtmpose_preprocess(src, dst, padding_rate)` applies ImageNet normalisation
  and leaves an extra border of `padding_rate` times the image size on each side.

A wrong dtype raises `TypeError`; a wrong shape, an empty or read-only
destination raises `ValueError`.

## Detection postprocessing

```python
from auxcv.detect import yolov8_det_postprocess

detections = yolov8_det_postprocess(output, iou_threshold=0.45, conf_threshold=0.25)
for xmin, ymin, xmax, ymax, cls, prob, grid in detections[0]:
    ...
```

Every function returns one list of detections per batch item. Boxes are
grouped by their best class and suppressed within each class.

- `auxcv.detect.yolov5_postprocess(batch_pred, iou_threshold, conf_threshold)`
  takes `batch x grids x (5 + classes)` outputs; a cell is kept when both its
  objectness and its best objectness-times-class score reach the threshold.
- `auxcv.detect.yolov8_det_postprocess(batch_pred, iou_threshold, conf_threshold)`
  takes `batch x (4 + classes) x grids` outputs.
- `auxcv.detect.yolov8_seg_postprocess(batch_pred, iou_threshold, conf_threshold, vec_dims)`
  does the same for segmentation heads whose last `vec_dims` channels are mask
  coefficients; the coefficients themselves are not decoded.
- `auxcv.props.yolov8_property_postprocess(batch_pred, iou_threshold, conf_threshold, num_cls, has_property, property_groups)`
  decodes detections that carry extra attribute groups. Each result is
  `((xmin, ymin, xmax, ymax, cls, prob), props)`, where `props` holds, for
  each group, the index and probability of its best attribute when
  `has_property[cls]` is true, and is empty otherwise. A group with no
  positive probability reports `auxcv.props.UNKNOWN_PROPERTY` as its index.

The suppression routines are available on their own in `auxcv.nms`: `nms`,
`nms_props`, `class_wise_nms` and `class_wise_nms_props`. They sort by score
and greedily drop boxes whose IoU with a kept box exceeds the threshold.

## Pose postprocessing

- `auxcv.pose.alphapose_postprocess(pred, scale)` reads 17 `(x, y, prob)`
  triples and multiplies the coordinates by `scale`.
- `auxcv.pose.rtmpose_postprocess(batch_pred_x, batch_pred_y, batch_scale_pad)`
  decodes SimCC distributions at half-pixel resolution into 17 keypoints per
  `(scale, pad_left, pad_top)` entry, using the values returned by
  `rtmpose_preprocess`.

## Counters in a buffer

`auxcv.atomic` has fetch-add, fetch-sub and compare-exchange operations on an
unsigned 32-bit counter kept, in native byte order, in the first four bytes of
a writable buffer such as a `bytearray`. Arithmetic wraps modulo 2**32. The
operations are serialised by one lock within the current process; they are
not atomic with respect to other processes sharing the same memory. The
`_release` variants behave exactly like the `_seq_cst` ones, and
`compare_exchange_add` and `compare_exchange_sub` always succeed.

## What it does not do

The package does not load or decode images, run models, draw results or
provide a command-line tool. It only prepares input arrays and interprets
output arrays that you pass in.