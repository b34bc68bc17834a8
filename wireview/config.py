from dataclasses import dataclass
from typing import Tuple


Color = Tuple[int, int, int]


@dataclass
class RenderConfig:
    """
    Runtime settings for the viewer.

    Colors are RGB tuples. move_step is in world units per key press,
    turn_step in degrees per key press.
    """
    width: int = 800
    height: int = 600
    fps: float = 60.0
    background: Color = (255, 255, 255)
    line_color: Color = (0, 0, 0)
    endpoint_color: Color = (255, 0, 0)
    show_endpoints: bool = True
    move_step: float = 1.0
    turn_step: float = 2.0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"framebuffer size must be positive (got {self.width}x{self.height})")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive (got {self.fps})")

    @classmethod
    def from_args(cls, args) -> "RenderConfig":
        """Build from an argparse namespace produced by main.parse_arguments()."""
        return cls(width=args.width,
                   height=args.height,
                   fps=args.fps,
                   show_endpoints=not args.no_endpoints,
                   move_step=args.move_step,
                   turn_step=args.turn_step)
