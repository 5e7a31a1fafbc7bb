import pytest

from charge_sim import Simulation


@pytest.fixture
def quiet_sim():
    """Undamped, elastic, effectively uncapped world with no particles."""
    return Simulation(
        width=800.0, height=600.0, damping=1.0, restitution=1.0, max_force=1e12, seed=3
    )
