import logging
from dataclasses import dataclass, field

from PIL import Image
from PIL.PngImagePlugin import Blend, Disposal as ApngDisposal

from .constants import *
from .frames import Animation, Disposal

log = logging.getLogger("libsticker.assemble")

DISPOSE_OPS = {
    Disposal.NONE: ApngDisposal.OP_NONE,
    Disposal.BACKGROUND: ApngDisposal.OP_BACKGROUND,
    Disposal.PREVIOUS: ApngDisposal.OP_PREVIOUS,
}


@dataclass
class FrameDescriptor:
    "everything the APNG writer needs for one fcTL/fdAT pair"

    image: Image.Image
    x_offset: int
    y_offset: int
    delay_num: int
    delay_den: int = DELAY_DENOMINATOR
    dispose_op: ApngDisposal = ApngDisposal.OP_NONE
    blend_op: Blend = Blend.OP_OVER

    @property
    def duration_ms(self) -> float:
        return self.delay_num * 1000 / self.delay_den


@dataclass
class AssembledAnimation:
    descriptors: list[FrameDescriptor] = field(default_factory=list)
    loop_count: int = 0


def assemble(animation: Animation) -> AssembledAnimation:
    "build output frame descriptors for a normalized animation"
    descriptors = []

    for i, frame in enumerate(animation.frames):
        x, y = frame.origin
        descriptors.append(
            FrameDescriptor(
                image=frame.to_image(),
                x_offset=x,
                y_offset=y,
                delay_num=frame.delay,
                dispose_op=DISPOSE_OPS[frame.disposal],
                blend_op=Blend.OP_OVER,
            )
        )
        log.debug(f"frame #{i}: {frame.width}x{frame.height} delay={frame.delay} {frame.disposal.name}")

    return AssembledAnimation(descriptors, animation.loop_count)
