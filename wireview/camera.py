"""
Keyboard navigation.

Each move returns a new ViewParameters; the renderer only ever sees whole
snapshots taken between frames.
"""
import math
from dataclasses import replace

from .config import RenderConfig
from .vecmath import rotate_axis, vec3_to_vec4
from .view import ViewParameters, view_axes


def strafe(view: ViewParameters, amount: float) -> ViewParameters:
    """Slide PRP and SRP sideways along u (positive = right)."""
    u, _, _ = view_axes(view.prp, view.srp, view.vup)
    step = u * amount
    return replace(view, prp=view.prp + step, srp=view.srp + step)


def dolly(view: ViewParameters, amount: float) -> ViewParameters:
    """Move PRP and SRP along the view direction -n (positive = forward)."""
    _, _, n = view_axes(view.prp, view.srp, view.vup)
    step = n * -amount
    return replace(view, prp=view.prp + step, srp=view.srp + step)


def turn(view: ViewParameters, degrees: float) -> ViewParameters:
    """Swing SRP around the VUP axis through PRP (positive = to the left)."""
    r = rotate_axis(view.vup, math.radians(degrees))
    offset = r.mul_vec4(vec3_to_vec4(view.srp - view.prp, 0.0))
    return replace(view, srp=view.prp + offset.xyz())


def apply_key(view: ViewParameters, key: str, config: RenderConfig) -> ViewParameters:
    """
    Map a key name (as reported by pygame.key.name) to a camera move.

      a / d          strafe left / right
      w / s          forward / back
      left / right   turn left / right
    """
    if key == "a":
        return strafe(view, -config.move_step)
    if key == "d":
        return strafe(view, config.move_step)
    if key == "w":
        return dolly(view, config.move_step)
    if key == "s":
        return dolly(view, -config.move_step)
    if key == "left":
        return turn(view, config.turn_step)
    if key == "right":
        return turn(view, -config.turn_step)
    return view
