"""
Matplotlib host that ticks the driver once per animation frame.
"""

from typing import Optional
import logging

from pid_playground.simulation.driver import SimulationDriver

logger = logging.getLogger(__name__)


class AnimatedPlayground:
    """
    Live view of a ``SimulationDriver``.

    Each animation frame calls ``driver.tick()`` and redraws the plot, which
    satisfies the driver's contract of being re-invoked at a steady cadence
    while running.
    """

    def __init__(
        self,
        driver: SimulationDriver,
        interval_ms: int = 16,
        plotter=None
    ):
        """
        Initialize animated host.

        Args:
            driver: Driver to tick
            interval_ms: Delay between frames in milliseconds
            plotter: PlaygroundPlotter to draw with (created if None)
        """
        if interval_ms < 1:
            raise ValueError("interval_ms must be at least 1")
        if plotter is None:
            from pid_playground.analyzer.plots import PlaygroundPlotter
            plotter = PlaygroundPlotter()

        self._driver = driver
        self._interval = interval_ms
        self._plotter = plotter
        self._animation = None
        self._frames = 0

    @property
    def driver(self) -> SimulationDriver:
        return self._driver

    @property
    def plotter(self):
        return self._plotter

    @property
    def frames(self) -> int:
        """Number of frames rendered so far."""
        return self._frames

    def frame(self, _frame_index: Optional[int] = None) -> list:
        """Tick the driver and redraw. Used as the FuncAnimation callback."""
        result = self._driver.tick()
        self._frames += 1
        if result.recomputed:
            logger.debug("Frame %d recomputed %s", self._frames, result.recomputed)
        return self._plotter.draw(self._driver.plot_frame())

    def start(self):
        """Create the animation without blocking."""
        from matplotlib.animation import FuncAnimation

        self._animation = FuncAnimation(
            self._plotter.figure, self.frame,
            interval=self._interval, blit=False, cache_frame_data=False
        )
        return self._animation

    def run(self) -> None:
        """Start the animation and block in the matplotlib event loop."""
        import matplotlib.pyplot as plt

        self.start()
        plt.show()
