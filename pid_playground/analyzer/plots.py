"""
Plotting of playground frames.
"""

from typing import Dict, Optional, Tuple
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.lines import Line2D

from pid_playground.simulation.driver import PlotFrame


class PlaygroundPlotter:
    """
    Draws model trajectories and the setpoint reference line.

    Lines are created once per model identity and updated in place on
    later frames, so redrawing at animation rate stays cheap. Lines of
    removed models are dropped.
    """

    # Fixed plot view
    X_LIMITS: Tuple[float, float] = (0.0, 25.0)
    Y_LIMITS: Tuple[float, float] = (0.0, 150.0)

    def __init__(self, ax: Optional[Axes] = None, figsize: Tuple[int, int] = (12, 6)):
        """
        Initialize plotter.

        Args:
            ax: Axes to draw on (a new figure is created if None)
            figsize: Figure size when creating a figure
        """
        if ax is None:
            _, ax = plt.subplots(figsize=figsize)
        self._ax = ax
        self._lines: Dict[int, Line2D] = {}
        self._setpoint_line = ax.axhline(
            y=0.0, color='#c44040', linestyle=(0, (5, 10)),
            linewidth=1.5, label='Setpoint'
        )

        ax.set_xlim(*self.X_LIMITS)
        ax.set_ylim(*self.Y_LIMITS)
        ax.set_xlabel('Time (s)', fontsize=12)
        ax.set_ylabel('Value', fontsize=12)
        ax.set_title('PID Playground', fontsize=14, fontweight='bold')
        ax.grid(True, alpha=0.3)

    @property
    def ax(self) -> Axes:
        return self._ax

    @property
    def figure(self) -> Figure:
        return self._ax.figure

    @property
    def lines(self) -> Dict[int, Line2D]:
        return dict(self._lines)

    def draw(self, frame: PlotFrame) -> list:
        """
        Update the axes to show ``frame``.

        Returns:
            Artists touched, for FuncAnimation
        """
        self._setpoint_line.set_ydata([frame.setpoint, frame.setpoint])

        present = set()
        for zorder, series in enumerate(frame.series, start=2):
            present.add(series.identity)
            line = self._lines.get(series.identity)
            if line is None:
                line, = self._ax.plot([], [], '-', linewidth=1.5)
                self._lines[series.identity] = line
            line.set_data(series.times, series.values)
            line.set_label(series.name)
            line.set_zorder(zorder)

        for identity in list(self._lines):
            if identity not in present:
                self._lines.pop(identity).remove()

        self._ax.legend(loc='lower right')
        return [self._setpoint_line] + list(self._lines.values())

    @staticmethod
    def show():
        """Display all plots."""
        plt.show()
