"""Ridge walking along the distance field from a clicked seed.

The walker recovers a stroke's centreline by following the ridge of the
distance field in both directions from the seed:

    1. Re-centre the seed on the strongest nearby distance value.
    2. Scan a ring of headings for the thickest continuation that clears
       the keep threshold (seed thickness * thickness_keep_frac).
    3. Walk forward and backward from the same start. Each step predicts
       a position along the current heading, slides it across the stroke
       to the best distance value, and blends the heading actually taken
       into the momentum.
    4. When nothing across the stroke clears the threshold, search a cone
       ahead of the walker at growing radii up to max_gap and jump to the
       best candidate. No candidate ends the walk.

Only strokes roughly as thick as the clicked one clear the threshold, so
thin side branches and thinner crossing curves are not followed. Every
loop is bounded by max_steps, max_points or max_gap.

Example usage:
    Walk a prepared distance field::

        from wand_lib.analysis.ridge_walker import RidgeWalker
        from wand_lib.domain import Point, WandOptions

        walker = RidgeWalker(field, seed_thickness=2.0, options=WandOptions())
        result = walker.walk(Point(120, 64))
        print(len(result.points), result.forward, result.backward)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .. import config
from ..domain.geometry import Point
from ..domain.options import WandOptions
from .distance import DistanceField

logger = logging.getLogger(__name__)


class Termination(Enum):
    """Why a directional walk stopped."""
    NO_DIRECTION = 'no_direction'
    GAP_EXHAUSTED = 'gap_exhausted'
    OUT_OF_BOUNDS = 'out_of_bounds'
    STALLED = 'stalled'
    MAX_POINTS = 'max_points'
    MAX_STEPS = 'max_steps'


@dataclass
class WalkerState:
    """Mutable state of one directional walk."""
    position: Point
    direction: Point
    points: List[Point] = field(default_factory=list)
    steps: int = 0

    def advance(self, position: Point, direction: Point) -> None:
        self.position = position
        self.direction = direction
        self.points.append(position)


@dataclass
class WalkResult:
    """Merged outcome of the backward and forward walks.

    Attributes:
        points: reverse(backward) followed by forward without the shared
            start point. A single point when no heading was found, empty
            when the seed was not a finite position.
        start: The re-centred start point.
        forward: Termination of the forward walk.
        backward: Termination of the backward walk.
    """
    points: List[Point]
    start: Optional[Point]
    forward: Termination
    backward: Termination


class RidgeWalker:
    """Bidirectional ridge walker over a read-only distance field.

    Attributes:
        field: Distance field to walk.
        seed_thickness: Stroke half-width estimate at the click.
        options: Parameters for the walk (step, momentum, gap search, caps).
        min_value: Distance value a position must reach to keep walking.
    """

    def __init__(self, field: DistanceField, seed_thickness: float, options: WandOptions):
        self.field = field
        self.seed_thickness = seed_thickness
        self.options = options
        self.min_value = seed_thickness * options.thickness_keep_frac
        self._reach = max(config.MIN_PERPENDICULAR_REACH, math.ceil(seed_thickness))

    def walk(self, seed: Point) -> WalkResult:
        """Trace the stroke through seed in both directions."""
        if not seed.is_finite():
            return WalkResult([], None, Termination.NO_DIRECTION, Termination.NO_DIRECTION)

        start = self.recenter(seed)
        heading = self.initial_direction(start)
        if heading is None:
            logger.debug("No heading clears %.2f at (%.1f, %.1f)", self.min_value, start.x, start.y)
            return WalkResult([start], start, Termination.NO_DIRECTION, Termination.NO_DIRECTION)

        forward, forward_end = self._walk_one_way(start, heading)
        backward, backward_end = self._walk_one_way(start, -heading)
        logger.debug("Walk from (%.1f, %.1f): forward %d pts (%s), backward %d pts (%s)",
                     start.x, start.y, len(forward), forward_end.value,
                     len(backward), backward_end.value)

        points = backward[::-1] + forward[1:]
        return WalkResult(points, start, forward_end, backward_end)

    def recenter(self, seed: Point) -> Point:
        """Move the seed to the highest distance value within a small radius.

        Offsets are visited ring by ring outward, so among equal values the
        closest one wins. The seed itself is kept unless strictly beaten.
        """
        best = seed
        best_value = self.field.sample(seed.x, seed.y)
        for r in range(1, config.RECENTER_RADIUS + 1):
            for dy in range(-r, r + 1):
                for dx in range(-r, r + 1):
                    if max(abs(dx), abs(dy)) != r:
                        continue
                    candidate = Point(seed.x + dx, seed.y + dy)
                    value = self.field.sample(candidate.x, candidate.y)
                    if value > best_value:
                        best_value = value
                        best = candidate
        return best

    def initial_direction(self, start: Point) -> Optional[Point]:
        """Heading toward the thickest neighbour that clears the threshold.

        Returns:
            Unit vector, or None if no heading on the ring qualifies.
        """
        step = self.options.step_size
        count = int(math.ceil(2.0 * math.pi / config.ANGLE_STEP))
        best_value = -math.inf
        heading = None
        for i in range(count):
            direction = Point.from_angle(i * config.ANGLE_STEP)
            ahead = start + direction * step
            value = self.field.sample(ahead.x, ahead.y)
            if value > best_value and value >= self.min_value:
                best_value = value
                heading = direction
        return heading

    def _walk_one_way(self, start: Point, heading: Point) -> Tuple[List[Point], Termination]:
        opts = self.options
        momentum = opts.momentum
        state = WalkerState(position=start, direction=heading, points=[start])

        while state.steps < opts.max_steps:
            state.steps += 1
            predicted = state.position + state.direction * opts.step_size
            best_value, offset = self._center_across(predicted, state.direction)

            if best_value < self.min_value:
                target = self._bridge_gap(state.position, state.direction)
                if target is None:
                    return state.points, Termination.GAP_EXHAUSTED
                jump = (target - state.position).normalized()
                state.advance(target, jump if jump.length() > 0 else state.direction)
                if len(state.points) >= opts.max_points:
                    return state.points, Termination.MAX_POINTS
                continue

            nxt = predicted + state.direction.perpendicular() * offset
            if not self.field.contains(nxt.x, nxt.y):
                return state.points, Termination.OUT_OF_BOUNDS

            moved = nxt - state.position
            distance = moved.length()
            if distance < config.STALL_DISTANCE:
                return state.points, Termination.STALLED

            taken = moved / distance
            blended = (state.direction * momentum + taken * (1.0 - momentum)).normalized()
            if blended.length() < config.DIRECTION_EPSILON:
                blended = taken
            state.advance(nxt, blended)
            if len(state.points) >= opts.max_points:
                return state.points, Termination.MAX_POINTS

        return state.points, Termination.MAX_STEPS

    def _center_across(self, predicted: Point, direction: Point) -> Tuple[float, float]:
        """Best biased distance value across the stroke at predicted.

        Samples the perpendicular line every PERPENDICULAR_STEP pixels out
        to the stroke reach. Each value is reduced by CENTER_BIAS per pixel
        of offset, which keeps the walker off a parallel neighbour stroke.

        Returns:
            (biased value, signed perpendicular offset) of the best sample.
        """
        perp = direction.perpendicular()
        reach = self._reach
        count = int(round(2 * reach / config.PERPENDICULAR_STEP)) + 1
        best_value = -math.inf
        best_offset = 0.0
        for i in range(count):
            k = -reach + i * config.PERPENDICULAR_STEP
            value = self.field.sample(predicted.x + perp.x * k, predicted.y + perp.y * k)
            biased = value - abs(k) * config.CENTER_BIAS
            if biased > best_value:
                best_value = biased
                best_offset = k
        return best_value, best_offset

    def _bridge_gap(self, position: Point, direction: Point) -> Optional[Point]:
        """Search a cone ahead of position for ink thick enough to resume.

        Radii grow in step_size increments up to max_gap; angles span
        +/- gap_angle around the heading. The highest-valued in-bounds
        candidate wins, ties going to the nearer radius.

        Returns:
            The jump target, or None when the cone holds no candidate.
        """
        opts = self.options
        step = opts.step_size
        if opts.max_gap < step:
            return None

        cone = math.radians(opts.gap_angle)
        base = math.atan2(direction.y, direction.x)
        n_angles = int(math.floor(2.0 * cone / config.ANGLE_STEP + 1e-9)) + 1
        n_radii = int(math.floor(opts.max_gap / step + 1e-9))

        best_value = -math.inf
        best = None
        for ri in range(1, n_radii + 1):
            radius = ri * step
            for ai in range(n_angles):
                angle = base - cone + ai * config.ANGLE_STEP
                candidate = position + Point.from_angle(angle, radius)
                if not self.field.contains(candidate.x, candidate.y):
                    continue
                value = self.field.sample(candidate.x, candidate.y)
                if value >= self.min_value and value > best_value:
                    best_value = value
                    best = candidate
        return best
