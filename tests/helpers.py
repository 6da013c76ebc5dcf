"""Synthetic hands for driving the sketch without a camera."""

from fingerpaint.landmarks import HandData, HandLandmark, Point

# Open canvas area, away from every button and the color wheel
CANVAS_SPOT = (200.0, 250.0)


def make_hand(index, thumb=None, handedness="Right"):
    """
    Build a hand with an index fingertip at `index`.

    The thumb defaults to 100px left of the index tip, i.e. not an OK sign.
    """
    ix, iy = index
    if thumb is None:
        thumb = (ix - 100, iy)
    tx, ty = thumb
    return HandData(
        landmarks={
            HandLandmark.WRIST: Point(ix, iy + 120),
            HandLandmark.THUMB_TIP: Point(tx, ty),
            HandLandmark.INDEX_TIP: Point(ix, iy),
        },
        handedness=handedness,
        confidence=0.9
    )


def ok_hand(index):
    """A hand making the OK sign with the fingertip at `index`."""
    ix, iy = index
    return make_hand(index, thumb=(ix + 10, iy + 10))


def two_hands():
    return [make_hand((100, 300)), make_hand((500, 300), handedness="Left")]
