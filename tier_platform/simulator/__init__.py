"""
Simulation entry points.

``SimulationCase`` wires a YAML config into the tiered-store engine, replays
the configured processes and writes the report artifacts.
"""

from .case import SimulationCase, SimulationResult

__all__ = ["SimulationCase", "SimulationResult"]
