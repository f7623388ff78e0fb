from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .elements import PLANET_ELEMENTS, OrbitalElements


class BodyKind(Enum):
    SUN = "sun"
    MOON = "moon"
    PLANET = "planet"


@dataclass(frozen=True)
class BodyInfo:
    """Static description of a solar-system body.

    Attributes:
        name: Display name
        kind: Which pipeline variant computes the body's position
        semidiameter: Angular semidiameter at 1 AU in arcseconds; the Moon
            uses its own distance law and leaves this unset
        magnitude: Visual magnitude coefficients (V0, c1, c2, c3) applied as
            V0 + 5 log10(rΔ) + c1·i + c2·i² + c3·i³ with i in degrees
        elements: Mean orbital elements, for planets
    """

    name: str
    kind: BodyKind
    semidiameter: Optional[float] = None
    magnitude: Tuple[float, ...] = ()
    elements: Optional[OrbitalElements] = None

    @property
    def key(self) -> str:
        return self.name.lower()


SOLAR_SYSTEM_BODIES = {
    "sun": BodyInfo(name="Sun", kind=BodyKind.SUN, semidiameter=959.63, magnitude=(-26.74,)),
    "moon": BodyInfo(name="Moon", kind=BodyKind.MOON, magnitude=(-12.73,)),
    "mercury": BodyInfo(
        name="Mercury",
        kind=BodyKind.PLANET,
        semidiameter=3.36,
        magnitude=(-0.42, 0.0380, -0.000273, 0.000002),
        elements=PLANET_ELEMENTS["mercury"],
    ),
    "venus": BodyInfo(
        name="Venus",
        kind=BodyKind.PLANET,
        semidiameter=8.41,
        magnitude=(-4.40, 0.0009, 0.000239, -0.00000065),
        elements=PLANET_ELEMENTS["venus"],
    ),
    "mars": BodyInfo(
        name="Mars",
        kind=BodyKind.PLANET,
        semidiameter=4.68,
        magnitude=(-1.52, 0.016),
        elements=PLANET_ELEMENTS["mars"],
    ),
    "jupiter": BodyInfo(
        name="Jupiter",
        kind=BodyKind.PLANET,
        semidiameter=98.44,
        magnitude=(-9.40, 0.005),
        elements=PLANET_ELEMENTS["jupiter"],
    ),
    # Ring contribution ignored.
    "saturn": BodyInfo(
        name="Saturn",
        kind=BodyKind.PLANET,
        semidiameter=82.73,
        magnitude=(-8.88,),
        elements=PLANET_ELEMENTS["saturn"],
    ),
    "uranus": BodyInfo(
        name="Uranus",
        kind=BodyKind.PLANET,
        semidiameter=35.02,
        magnitude=(-7.19,),
        elements=PLANET_ELEMENTS["uranus"],
    ),
    "neptune": BodyInfo(
        name="Neptune",
        kind=BodyKind.PLANET,
        semidiameter=33.50,
        magnitude=(-6.87,),
        elements=PLANET_ELEMENTS["neptune"],
    ),
}

PLANETS = [key for key, info in SOLAR_SYSTEM_BODIES.items() if info.kind is BodyKind.PLANET]
