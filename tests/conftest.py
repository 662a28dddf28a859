import matplotlib

matplotlib.use("Agg")

import pytest

from quadpath.models import Field, Rect


@pytest.fixture
def empty_field():
    return Field(32.0)


@pytest.fixture
def wall_field():
    # full-width wall at mid-height, no gap
    return Field(32.0, (Rect(0, 15, 32, 2),))


@pytest.fixture
def detour_field():
    # small obstacle straddling the start-destination line, shifted right
    return Field(16.0, (Rect(7, 6, 3, 3),))


@pytest.fixture
def cluttered_field():
    return Field(
        16.0,
        (
            Rect(2.5, 3.25, 4, 2),
            Rect(9, 9, 5, 1.5),
            Rect(5, 5, 2, 8),
            Rect(10, 2, 3, 3),
            Rect(11, 3, 4, 1),  # overlaps the previous one
        ),
    )
