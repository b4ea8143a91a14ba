"""
CATALOG: DEFAULT MATERIALS AND STEEL SECTIONS
=============================================

PURPOSE:
--------
Standard records so a model (or a test) can reference "S355" or "IPE300"
instead of typing section properties by hand.

- MATERIALS: structural steel S355 and S275, concrete C30/37
- STEEL_SECTIONS: European IPE 200 … IPE 500, ordered by size

The section list is ordered from smallest to largest because the section
optimiser walks it in that order.

SECTION DATA:
-------------
Values follow the usual rolled-section tables, in the units of
framecheck.model (cm², cm⁴, cm³, cm, cm⁶, mm). The ``_y`` properties are
the major axis (strong-axis bending), as everywhere in framecheck.
"""

from typing import Dict, List

from .model import Material, Section


MATERIALS: Dict[str, Material] = {
    'S355': Material(
        id='S355', name='Steel S355',
        elastic_modulus=210.0, shear_modulus=81.0, poisson_ratio=0.3,
        density=7850.0, yield_strength=355.0, ultimate_strength=490.0,
        thermal_expansion=1.2e-5,
    ),
    'S275': Material(
        id='S275', name='Steel S275',
        elastic_modulus=210.0, shear_modulus=81.0, poisson_ratio=0.3,
        density=7850.0, yield_strength=275.0, ultimate_strength=430.0,
        thermal_expansion=1.2e-5,
    ),
    'C30/37': Material(
        id='C30/37', name='Concrete C30/37',
        elastic_modulus=33.0, shear_modulus=13.75, poisson_ratio=0.2,
        density=2500.0, yield_strength=30.0, ultimate_strength=37.0,
        thermal_expansion=1.0e-5,
    ),
}


def _ipe(name, A, Iy, Iz, Wy, Wz, iy, iz, It, Iw, h, b, tw, tf, Avz, Avy) -> Section:
    return Section(
        id=name, name=name, type='I-beam',
        area=A,
        moment_of_inertia_y=Iy, moment_of_inertia_z=Iz,
        section_modulus_y=Wy, section_modulus_z=Wz,
        radius_of_gyration_y=iy, radius_of_gyration_z=iz,
        torsional_constant=It, warping_constant=Iw,
        height=h, width=b, thickness=tw, flange_thickness=tf,
        shear_area_z=Avz, shear_area_y=Avy,
    )


#                 A      Iy      Iz      Wy     Wz     iy    iz    It     Iw        h    b    tw    tf    Avz   Avy
STEEL_SECTIONS: List[Section] = [
    _ipe('IPE200', 28.5,  1943,   142,   194,   28.5, 8.26, 2.24, 6.98,  12990,    200, 100, 5.6,  8.5,  14.0, 17.0),
    _ipe('IPE240', 39.1,  3892,   284,   324,   47.3, 9.97, 2.69, 12.9,  37390,    240, 120, 6.2,  9.8,  19.1, 23.5),
    _ipe('IPE300', 53.8,  8356,   604,   557,   80.5, 12.5, 3.35, 20.1,  125900,   300, 150, 7.1,  10.7, 25.7, 32.1),
    _ipe('IPE360', 72.7,  16270,  1043,  904,   123,  15.0, 3.79, 37.3,  313600,   360, 170, 8.0,  12.7, 35.1, 43.2),
    _ipe('IPE400', 84.5,  23130,  1318,  1156,  146,  16.5, 3.95, 51.1,  490000,   400, 180, 8.6,  13.5, 42.7, 48.6),
    _ipe('IPE450', 98.8,  33740,  1676,  1500,  176,  18.5, 4.12, 66.9,  791000,   450, 190, 9.4,  14.6, 50.9, 55.5),
    _ipe('IPE500', 116.0, 48200,  2142,  1928,  214,  20.4, 4.31, 89.3,  1249000,  500, 200, 10.2, 16.0, 59.9, 64.0),
]


def get_section(name: str) -> Section:
    """Look up a catalog section by name (e.g. 'IPE300')."""
    for section in STEEL_SECTIONS:
        if section.name == name:
            return section
    raise KeyError(f"Section {name!r} not in catalog")


def get_material(name: str) -> Material:
    return MATERIALS[name]
