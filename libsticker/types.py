from typing import Annotated, Literal

import numpy.typing as npt

Color = tuple[int, int, int, int]

# pixel buffers are stored row-major, like PIL hands them to numpy
IndexedPixels = Annotated[npt.NDArray, Literal["H", "W"]]
ExplicitPixels = Annotated[npt.NDArray, Literal["H", "W", 4]]
