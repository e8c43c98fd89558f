import logging
import math
import random

PADDING = 40
PADDLE_HEIGHT = 100
PADDLE_WIDTH = 20
BALL_SIZE = 30

PLAYER_SPEED = 500
BALL_SPEED = 500

UP = -1
DOWN = 1

log = logging.getLogger("pong.logic")


class InvalidFrameError(ValueError):
    pass


def clamp(v, low, high):
    if v < low:
        return low
    if v > high:
        return high
    return v


def randomise_vector(x, y, rng=random):
    """Return (+-x, +-y) with each sign picked independently, 50/50."""
    vx = x if rng.random() < 0.5 else -x
    vy = y if rng.random() < 0.5 else -y
    return vx, vy


def move_paddle(y, held, direction, dt, field_height):
    if held:
        y += direction * PLAYER_SPEED * dt

    half = PADDLE_HEIGHT / 2
    return clamp(y, half, field_height - half)


def boxes_touch(ax, ay, aw, ah, bx, by, bw, bh):
    # centre anchored boxes, touching edges do not count
    return (ax - aw / 2 < bx + bw / 2
            and ax + aw / 2 > bx - bw / 2
            and ay - ah / 2 < by + bh / 2
            and ay + ah / 2 > by - bh / 2)


class FrameInput:
    """Everything the outside world hands the simulation for one frame."""

    def __init__(self, width, height, dt,
                 p1_up=False, p1_down=False, p2_up=False, p2_down=False):
        check_field(width, height)

        if not math.isfinite(dt) or dt < 0:
            log.debug("dt %r clamped to 0", dt)
            dt = 0.0

        self.width = width
        self.height = height
        self.dt = dt
        self.p1_up = p1_up
        self.p1_down = p1_down
        self.p2_up = p2_up
        self.p2_down = p2_down


def _positive(n):
    return isinstance(n, (int, float)) and math.isfinite(n) and n > 0


def check_field(width, height):
    if not _positive(width) or not _positive(height):
        raise InvalidFrameError(f"bad field size {width}x{height}")
    if height < PADDLE_HEIGHT:
        raise InvalidFrameError(f"field height {height} is smaller than a paddle")


class GameState:
    def __init__(self, width, height, rng=None):
        check_field(width, height)
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()

        self.paddle_w = PADDLE_WIDTH
        self.paddle_h = PADDLE_HEIGHT
        self.ball_size = BALL_SIZE

        self.paddle_x = [PADDLE_WIDTH / 2 + PADDING, width - PADDLE_WIDTH / 2 - PADDING]
        self.paddles = [height / 2, height / 2]

        self.scores = [0, 0]
        self.serve()

    def serve(self):
        self.ball_x = self.width / 2
        self.ball_y = self.height / 2
        self.ball_vx, self.ball_vy = randomise_vector(BALL_SPEED, BALL_SPEED, self.rng)

    def to_dict(self):
        return {
            'width': self.width,
            'height': self.height,
            'paddles': list(self.paddles),
            'paddle_x': list(self.paddle_x),
            'paddle_w': self.paddle_w,
            'paddle_h': self.paddle_h,
            'ball': {'x': self.ball_x, 'y': self.ball_y},
            'ball_size': self.ball_size,
            'scores': list(self.scores),
        }

    def update(self, frame):
        self.width = frame.width
        self.height = frame.height
        dt = frame.dt

        # one call per key, so holding both keys moves (and clamps) twice
        keys = ((frame.p1_up, frame.p1_down), (frame.p2_up, frame.p2_down))
        for i, (up, down) in enumerate(keys):
            self.paddles[i] = move_paddle(self.paddles[i], up, UP, dt, self.height)
            self.paddles[i] = move_paddle(self.paddles[i], down, DOWN, dt, self.height)

        self.ball_x += self.ball_vx * dt
        self.ball_y += self.ball_vy * dt

        self.resolve()

    def resolve(self):
        if self.ball_x < 0:
            self.score(1)
        elif self.ball_x > self.width:
            self.score(0)

        half_b = self.ball_size / 2
        if self.ball_y - half_b < 0:
            self.ball_y = half_b
            self.ball_vy = abs(self.ball_vy)
        elif self.ball_y + half_b > self.height:
            self.ball_y = self.height - half_b
            self.ball_vy = -abs(self.ball_vy)

        if self.touching(0):
            self.ball_vx = abs(self.ball_vx)
        elif self.touching(1):
            self.ball_vx = -abs(self.ball_vx)

    def touching(self, i):
        return boxes_touch(self.ball_x, self.ball_y, self.ball_size, self.ball_size,
                           self.paddle_x[i], self.paddles[i], self.paddle_w, self.paddle_h)

    def score(self, i):
        self.scores[i] += 1
        self.serve()
        log.info("player %d scores # %d:%d", i + 1, self.scores[0], self.scores[1])


def step(state, frame):
    state.update(frame)
    return state
