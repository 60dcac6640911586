from .vector import (
    Vec3,
    Orientation,
    CARDINALS,
)
