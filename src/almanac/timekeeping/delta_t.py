"""ΔT = TD − UT, the drift of Earth's rotation against dynamical time.

Within the span of the measured table (1650-2004) values are linearly
interpolated between the two-yearly nodes; outside it the Espenak-Meeus
polynomial for the relevant era is used.
"""

import numpy as np

TABLE_FIRST_YEAR = 1650
TABLE_LAST_YEAR = 2004
TABLE_STEP = 2

# Seconds, one value per two years from 1650 to 2004 inclusive.
_DELTA_T_TABLE = np.array(
    [
        46.0, 44.0, 42.0, 40.0, 38.0, 35.0, 33.0, 31.0, 29.0, 26.0,  # 1650
        24.0, 22.0, 20.0, 18.0, 16.0, 14.0, 12.0, 11.0, 10.0, 9.0,  # 1670
        8.0, 7.0, 7.0, 7.0, 7.0, 7.0, 7.0, 8.0, 8.0, 9.0,  # 1690
        9.0, 9.0, 9.0, 9.0, 10.0, 10.0, 10.0, 10.0, 10.0, 10.0,  # 1710
        10.0, 10.0, 11.0, 11.0, 11.0, 11.0, 11.0, 12.0, 12.0, 12.0,  # 1730
        12.0, 13.0, 13.0, 13.0, 14.0, 14.0, 14.0, 14.0, 15.0, 15.0,  # 1750
        15.0, 15.0, 15.0, 16.0, 16.0, 16.0, 16.0, 16.0, 16.0, 16.0,  # 1770
        16.0, 15.0, 15.0, 14.0, 13.0, 13.7, 12.5, 12.2, 12.0, 12.0,  # 1790
        12.0, 12.0, 12.0, 12.0, 11.9, 11.6, 11.0, 10.2, 9.2, 8.2,  # 1810
        7.1, 6.2, 5.6, 5.4, 5.3, 5.4, 5.6, 5.9, 6.2, 6.5,  # 1830
        6.8, 7.1, 7.3, 7.5, 7.6, 7.7, 7.3, 6.2, 5.2, 2.7,  # 1850
        1.4, -1.2, -2.8, -3.8, -4.8, -5.5, -5.3, -5.6, -5.7, -5.9,  # 1870
        -6.0, -6.3, -6.5, -6.2, -4.7, -2.8, -0.1, 2.6, 5.3, 7.7,  # 1890
        10.4, 13.3, 16.0, 18.2, 20.2, 21.1, 22.4, 23.5, 23.8, 24.3,  # 1910
        24.0, 23.9, 23.9, 23.7, 24.0, 24.3, 25.3, 26.2, 27.3, 28.2,  # 1930
        29.1, 30.0, 30.7, 31.4, 32.2, 33.1, 34.0, 35.0, 36.5, 38.3,  # 1950
        40.2, 42.2, 44.5, 46.5, 48.5, 50.5, 52.2, 53.8, 54.9, 55.8,  # 1970
        56.9, 58.3, 60.0, 61.6, 63.0, 63.8, 64.3, 64.6,  # 1990
    ]
)

_TABLE_YEARS = np.arange(TABLE_FIRST_YEAR, TABLE_LAST_YEAR + 1, TABLE_STEP, dtype=float)

assert len(_TABLE_YEARS) == len(_DELTA_T_TABLE)


def delta_t(year: float) -> float:
    """Compute ΔT for a decimal year.

    Args:
        year: Decimal (astronomical) year, e.g. 1987.27

    Returns:
        TD − UT in seconds
    """
    if TABLE_FIRST_YEAR <= year <= TABLE_LAST_YEAR:
        return float(np.interp(year, _TABLE_YEARS, _DELTA_T_TABLE))
    return _delta_t_polynomial(year)


def _delta_t_polynomial(y: float) -> float:
    """Espenak-Meeus best-fit polynomials for dates outside the table."""
    if y < -500.0 or y >= 2150.0:
        u = (y - 1820.0) / 100.0
        return -20.0 + 32.0 * u * u

    if y < 500.0:
        u = y / 100.0
        return float(
            np.polyval(
                [0.0090316521, 0.022174192, -0.1798452, -5.952053, 33.78311, -1014.41, 10583.6],
                u,
            )
        )

    if y < 1600.0:
        u = (y - 1000.0) / 100.0
        return float(
            np.polyval(
                [0.0083572073, -0.005050998, -0.8503463, 0.319781, 71.23472, -556.01, 1574.2],
                u,
            )
        )

    if y < TABLE_FIRST_YEAR:
        t = y - 1600.0
        return 120.0 - 0.9808 * t - 0.01532 * t * t + t**3 / 7129.0

    if y < 2050.0:
        t = y - 2000.0
        return 62.92 + 0.32217 * t + 0.005589 * t * t

    u = (y - 1820.0) / 100.0
    return -20.0 + 32.0 * u * u - 0.5628 * (2150.0 - y)
