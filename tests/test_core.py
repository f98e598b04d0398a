# tests/test_core.py
from life_sim import ManualScheduler, SimulationHandle, utils


def test_small_run():
    utils.set_seed(0)
    sim = SimulationHandle(ManualScheduler())
    sim.start(x_cells=12, y_cells=12, z_cells=12, density=0.3)
    lattice = sim.run(5)
    assert sim.generation == 5
    assert lattice.shape == (12, 12, 12)
    assert set(lattice.cells.ravel().tolist()) <= {0, 1}
