"""Shared fixtures for the Marine Contaminant Diffusion test suite."""

import sys
import os
import pytest
import numpy as np

# Ensure project root is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture
def base_conditions():
    """Every EnvironmentalVector field except distance."""
    return {
        "source_concentration": 15.0,
        "temperature": 22.0,
        "ph": 6.8,
        "salinity": 35.0,
        "current_speed": 1.2,
        "wind_speed": 10.0,
        "depth": 5.0,
    }


@pytest.fixture
def example_vector(base_conditions):
    """The worked example: 15 ug/L source observed 5 km away."""
    from models.diffusion import EnvironmentalVector
    return EnvironmentalVector(distance=5.0, **base_conditions)


@pytest.fixture
def rng():
    """Seeded generator for the jittered field estimator."""
    return np.random.default_rng(42)


@pytest.fixture
def harbour_source():
    """A single outfall at a fixed Mediterranean location."""
    from models.sources import PointSource
    return PointSource(
        name="Test Outfall",
        location=(43.0, 6.0),
        base_concentration=2.0,
        level="medium",
    )


@pytest.fixture
def test_zone():
    """A 1 km pollution zone."""
    from models.sources import AreaSource
    return AreaSource(
        name="Test Zone",
        center=(43.2, 6.2),
        radius=1000.0,
        level_concentrations={"low": 1.0, "medium": 2.0, "high": 4.0},
    )


@pytest.fixture
def mock_provider():
    from data.interfaces import MockDataProvider
    return MockDataProvider()
