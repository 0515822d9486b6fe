import pydantic
import pytest
from pytest import approx

from geodetics import (
    DATUMS, ELLIPSOIDS, REFERENCE_FRAMES, Datum, Ellipsoid, InvalidInputError, ReferenceFrame,
    UnknownDatumError, UnknownReferenceFrameError
)
from geodetics.ellipsoids import get_datum, get_ellipsoid, get_reference_frame


def test_ellipsoid_init():
    ellipsoid = Ellipsoid('Test', 6378137, 6356752.314245, 1 / 298.257223563)
    assert ellipsoid.name == 'Test'
    assert ellipsoid.a == 6378137
    assert ellipsoid.b == 6356752.314245
    assert ellipsoid.f == 1 / 298.257223563

    # Sphere
    sphere = Ellipsoid('Sphere', 6371000, 6371000, 0)
    assert sphere.e2 == 0.
    assert sphere.ep2 == 0.

    with pytest.raises(InvalidInputError):
        Ellipsoid('Test', 0, 0, 0)

    with pytest.raises(InvalidInputError):
        # b > a
        Ellipsoid('Test', 6356752, 6378137, 1 / 298.257223563)

    with pytest.raises(InvalidInputError):
        Ellipsoid('Test', 6378137, 6356752, 1)

    with pytest.raises(pydantic.ValidationError):
        Ellipsoid('Test', 'a', 6356752, 0.003)


def test_ellipsoid_eccentricities():
    wgs84 = ELLIPSOIDS['WGS84']
    assert wgs84.e2 == approx(0.00669437999014, abs=1e-14)
    assert wgs84.ep2 == approx(0.00673949674228, abs=1e-14)


def test_ellipsoid_eq():
    assert ELLIPSOIDS['WGS84'] == Ellipsoid(
        'Renamed', 6378137, 6356752.314245, 1 / 298.257223563
    )
    assert ELLIPSOIDS['WGS84'] != ELLIPSOIDS['GRS80']
    assert ELLIPSOIDS['WGS84'] != 'WGS84'
    assert hash(ELLIPSOIDS['WGS84']) == hash(
        Ellipsoid('Renamed', 6378137, 6356752.314245, 1 / 298.257223563)
    )


def test_ellipsoid_repr():
    assert repr(ELLIPSOIDS['WGS72']).startswith('<Ellipsoid WGS72 a=6378135')


def test_registries():
    assert len(ELLIPSOIDS) == 9
    assert len(DATUMS) == 11
    assert len(REFERENCE_FRAMES) == 12

    for name, datum in DATUMS.items():
        assert datum.name == name
        assert len(datum.transform) == 7

    assert DATUMS['OSGB36'].ellipsoid == ELLIPSOIDS['Airy1830']
    assert DATUMS['WGS84'].transform == (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
    assert REFERENCE_FRAMES['ITRF2014'].epoch == 2010.0
    assert REFERENCE_FRAMES['WGS84g1762'].ellipsoid == ELLIPSOIDS['WGS84']

    # Registries are read-only
    with pytest.raises(TypeError):
        DATUMS['Test'] = DATUMS['WGS84']

    with pytest.raises(TypeError):
        del REFERENCE_FRAMES['ITRF2014']


def test_datum():
    datum = Datum('Test', ELLIPSOIDS['GRS80'], (1, 2, 3, 0, 0, 0, 0))
    assert datum.transform == (1., 2., 3., 0., 0., 0., 0.)
    assert repr(datum) == '<Datum Test (GRS80)>'
    assert datum == Datum('Test', ELLIPSOIDS['GRS80'], (1, 2, 3, 0, 0, 0, 0))
    assert datum != DATUMS['WGS84']

    with pytest.raises(pydantic.ValidationError):
        # Too few parameters
        Datum('Test', ELLIPSOIDS['GRS80'], (1, 2, 3))

    with pytest.raises(pydantic.ValidationError):
        Datum('Test', 'GRS80', (1, 2, 3, 0, 0, 0, 0))


def test_reference_frame():
    frame = ReferenceFrame('Test', 2020.0, ELLIPSOIDS['GRS80'])
    assert frame.epoch == 2020.
    assert repr(frame) == '<ReferenceFrame Test@2020.0>'
    assert frame == ReferenceFrame('Test', 2020., ELLIPSOIDS['GRS80'])
    assert frame != REFERENCE_FRAMES['ITRF2014']


def test_get_ellipsoid():
    assert get_ellipsoid('Airy1830') is ELLIPSOIDS['Airy1830']
    assert get_ellipsoid(ELLIPSOIDS['GRS80']) is ELLIPSOIDS['GRS80']

    with pytest.raises(UnknownDatumError):
        get_ellipsoid('Unknown')


def test_get_datum():
    assert get_datum('OSGB36') is DATUMS['OSGB36']
    assert get_datum(DATUMS['ED50']) is DATUMS['ED50']

    with pytest.raises(UnknownDatumError, match='unrecognised datum'):
        get_datum('OSGB37')

    # Also catchable as the standard lookup/value errors
    with pytest.raises(KeyError):
        get_datum('OSGB37')

    with pytest.raises(ValueError):
        get_datum(None)


def test_get_reference_frame():
    assert get_reference_frame('ITRF2014') is REFERENCE_FRAMES['ITRF2014']
    assert get_reference_frame(REFERENCE_FRAMES['GDA94']) is REFERENCE_FRAMES['GDA94']

    with pytest.raises(UnknownReferenceFrameError, match='ITRF2014'):
        get_reference_frame('ITRF2020')
