import argparse
import collections
import logging
import random
import sys

from PyQt6 import QtWidgets, QtCore, QtGui

from pong_log import setup_logging
from pong_logic import GameState, FrameInput, InvalidFrameError, PADDING, step

WIDTH = 800
HEIGHT = 600

GREY = QtGui.QColor.fromRgbF(0.3, 0.3, 0.3, 1.0)
WHITE = QtGui.QColor(255, 255, 255)
BLACK = QtGui.QColor(0, 0, 0)

Key = QtCore.Qt.Key
# keyed by the int codes QKeyEvent.key() returns
KEYS = {
    Key.Key_W.value: "p1_up",
    Key.Key_S.value: "p1_down",
    Key.Key_Up.value: "p2_up",
    Key.Key_Down.value: "p2_down",
}

log = logging.getLogger("pong.gui")


def frame_input(held, width, height, dt):
    flags = {name: key in held for key, name in KEYS.items()}
    return FrameInput(width, height, dt, **flags)


class FpsCounter:
    def __init__(self, size=100):
        self.samples = collections.deque(maxlen=size)

    def tick(self, dt):
        if dt > 0:
            self.samples.append(dt)

    def fps(self):
        total = sum(self.samples)
        if not total:
            return 0.0
        return len(self.samples) / total


class GameWidget(QtWidgets.QWidget):
    def __init__(self, state):
        super().__init__()
        self.state = state
        self.fps = 0.0
        self.setFixedSize(WIDTH, HEIGHT)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.NoFocus)

    def paintEvent(self, event):
        qp = QtGui.QPainter(self)
        qp.fillRect(self.rect(), BLACK)

        st = self.state.to_dict()
        W = self.width()
        H = self.height()

        pen = QtGui.QPen(GREY)
        pen.setWidthF(2.0)
        qp.setPen(pen)
        qp.drawLine(QtCore.QPointF(W / 2, PADDING), QtCore.QPointF(W / 2, H - PADDING))

        qp.setPen(QtCore.Qt.PenStyle.NoPen)
        qp.setBrush(WHITE)

        pw = st["paddle_w"]
        ph = st["paddle_h"]
        for x, y in zip(st["paddle_x"], st["paddles"]):
            qp.drawRect(QtCore.QRectF(x - pw / 2, y - ph / 2, pw, ph))

        bs = st["ball_size"]
        bx = st["ball"]["x"]
        by = st["ball"]["y"]
        qp.drawRect(QtCore.QRectF(bx - bs / 2, by - bs / 2, bs, bs))

        qp.setPen(WHITE)
        fm = qp.fontMetrics()
        score = f"{st['scores'][0]}        {st['scores'][1]}"
        qp.drawText(QtCore.QRectF(0, fm.height() / 2, W, fm.height()),
                    QtCore.Qt.AlignmentFlag.AlignHCenter, score)

        qp.drawText(QtCore.QRectF(0, 0, W, fm.height()),
                    QtCore.Qt.AlignmentFlag.AlignLeft, f"{self.fps:.2f} FPS")
        qp.end()


class MainWindow(QtWidgets.QWidget):
    def __init__(self, seed=None, fps=0):
        super().__init__()
        self.setWindowTitle("Pong")

        self.state = GameState(WIDTH, HEIGHT, random.Random(seed))
        self.held = set()
        self.counter = FpsCounter()

        self.game_widget = GameWidget(self.state)
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.game_widget)
        self.setFixedSize(WIDTH, HEIGHT)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)

        self.clock = QtCore.QElapsedTimer()
        self.last_ns = 0
        self.timer = QtCore.QTimer(self)
        self.timer.setTimerType(QtCore.Qt.TimerType.PreciseTimer)
        self.timer.setInterval(1000 // fps if fps > 0 else 0)
        self.timer.timeout.connect(self.tick)

        log.info("game start # seed=%s fps=%s", seed, fps or "uncapped")

    def start(self):
        self.clock.start()
        self.last_ns = 0
        self.timer.start()

    def tick(self):
        # ns resolution, the clock keeps running so no remainder is dropped
        now = self.clock.nsecsElapsed()
        dt = (now - self.last_ns) / 1e9
        self.last_ns = now
        self.counter.tick(dt)

        try:
            frame = frame_input(self.held, self.game_widget.width(), self.game_widget.height(), dt)
        except InvalidFrameError as e:
            log.warning("frame skipped: %s", e)
            return

        step(self.state, frame)
        self.game_widget.fps = self.counter.fps()
        self.game_widget.update()

    def keyPressEvent(self, e):
        if e.isAutoRepeat():
            return
        k = e.key()
        if k in KEYS:
            self.held.add(k)
        else:
            super().keyPressEvent(e)

    def keyReleaseEvent(self, e):
        if e.isAutoRepeat():
            return
        self.held.discard(e.key())

    def focusOutEvent(self, e):
        self.held.clear()
        super().focusOutEvent(e)

    def closeEvent(self, e):
        self.timer.stop()
        log.info("game over # %d:%d", *self.state.scores)
        e.accept()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="pong", description="Two player Pong")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for ball serves (default: random)")
    parser.add_argument("--fps", type=int, default=0,
                        help="frame rate cap, 0 for uncapped (default: 0)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    app = QtWidgets.QApplication(sys.argv)
    w = MainWindow(seed=args.seed, fps=args.fps)
    w.show()
    w.setFocus()
    w.start()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
