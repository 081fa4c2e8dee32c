from mpm2d.simulation.base import BaseSimulation
from mpm2d.simulation.gui import GUI_Simulation

__all__ = ["BaseSimulation", "GUI_Simulation"]
