import pytest

from almanac.timekeeping import delta_t


@pytest.mark.parametrize(
    "year,expected",
    [
        (1650, 46.0),
        (1700, 7.0),
        (1800, 13.7),
        (1900, -2.8),
        (1970, 40.2),
        (1990, 56.9),
        (2004, 64.6),
    ],
)
def test_table_nodes(year, expected):
    """Test that table years return the tabulated value."""
    assert delta_t(year) == pytest.approx(expected, abs=1e-9)


def test_interpolates_between_nodes():
    """Test linear interpolation between two-yearly nodes."""
    assert delta_t(1971.0) == pytest.approx((40.2 + 42.2) / 2.0)
    assert delta_t(1970.5) == pytest.approx(40.2 + 0.25 * 2.0)


def test_medieval_polynomial():
    """Test the 500-1600 polynomial against a hand evaluation."""
    assert delta_t(1500.0) == pytest.approx(198.32, abs=0.05)


def test_modern_polynomial():
    """Test the 2005-2050 polynomial."""
    assert delta_t(2017.0) == pytest.approx(70.01, abs=0.02)


def test_continuous_at_end_of_table():
    """Test that the table and the modern polynomial roughly agree at the seam."""
    assert abs(delta_t(2004.0) - delta_t(2004.001)) < 1.0


def test_far_past_is_large():
    """Test that ΔT grows to hours in antiquity."""
    assert delta_t(-1000.0) > 20000.0
