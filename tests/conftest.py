import jax.numpy as jnp
import pytest

from geodax.config import set_dtype, set_max_iterations


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision and the default iteration cap before every test.

    Tests that lower the precision or the cap (e.g. test_config.py) restore
    the defaults through this fixture on the next test.
    """
    set_dtype(jnp.float64)
    set_max_iterations(50)
