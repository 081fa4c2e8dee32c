from mpm2d.simulation.base import BaseSimulation
from mpm2d.configurations import Configuration
from mpm2d.constants import ColorHEX

from typing import Optional

import taichi as ti
import numpy as np

# Arrow keys stand in for the tilt of a device:
GRAVITY_KEYS = {
    ti.GUI.UP: (0.0, 1.0),
    ti.GUI.DOWN: (0.0, -1.0),
    ti.GUI.LEFT: (-1.0, 0.0),
    ti.GUI.RIGHT: (1.0, 0.0),
}


class GUI_Simulation(BaseSimulation):
    def __init__(
        self,
        configurations: list[Configuration],
        name: str,
        res: int = 720,
        radius: float = 1.5,
        initial_configuration: int = 0,
        initial_model: Optional[int] = None,
    ) -> None:
        """Constructs a GUI renderer, this advances the MPM solver and renders the updated particle positions.
        ---
        Parameters:
            configurations: list of configurations for the solver
            name: string displayed at the top of the window
            res: width of the window, the height follows from the boundary
            radius: radius of the drawn particles in pixels
        """
        super().__init__(
            initial_configuration=initial_configuration,
            initial_model=initial_model,
            configurations=configurations,
            name=name,
        )

        # GUI.
        width, height = self.configuration.boundary
        self.gui = ti.GUI(name, res=(res, int(res * height / width)), background_color=ColorHEX.Background)
        self.radius = radius

    def handle_events(self) -> None:
        """
        Handle key presses arising from window events.
        """
        for event in self.gui.get_events(ti.GUI.PRESS):
            if event.key == "r":
                self.reset()
            elif event.key == "m":
                self.switch_model()
            elif event.key == ti.GUI.SPACE:
                self.is_paused = not self.is_paused
            elif event.key in GRAVITY_KEYS:
                self.steer_gravity(GRAVITY_KEYS[event.key])
            elif event.key in [ti.GUI.ESCAPE, ti.GUI.EXIT]:
                self.gui.running = False

    def render(self) -> None:
        """Renders the simulation with the data from the MPM solver."""
        # Positions are scaled from the boundary into the unit square of the window:
        positions = self.solver.positions_to_numpy() / np.array(self.configuration.boundary, dtype=np.float32)
        material = self.model.material
        self.gui.circles(positions, radius=self.radius, color=material.Color)
        title = self.configuration.name
        if self.configuration.information:
            title += f" ({self.configuration.information})"
        self.gui.text(f"{title} | {self.model.name} | rho={material.Density}", (0.01, 0.99))
        self.gui.show()

    def run(self) -> None:
        """Runs this simulation."""
        while self.gui.running:
            self.handle_events()
            self.substep()
            self.render()
