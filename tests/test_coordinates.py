import numpy as np
import pytest

from geodetics import (
    DATUMS, ELLIPSOIDS, REFERENCE_FRAMES, CartesianPoint, GeodeticPoint, InvalidInputError,
    UnknownDatumError, UnknownReferenceFrameError
)


def test_geodetic_point_init():
    point = GeodeticPoint(51.47788, -0.00147)
    assert point.latitude == 51.47788
    assert point.longitude == -0.00147
    assert point.height == 0.
    assert point.datum is None
    assert point.reference_frame is None
    assert point.epoch is None
    assert point.ellipsoid == ELLIPSOIDS['WGS84']

    # Integers are accepted and stored as floats
    point = GeodeticPoint(1, 2, 3)
    assert point.to_float() == (1., 2., 3.)
    assert isinstance(point.latitude, float)

    with pytest.raises(InvalidInputError):
        GeodeticPoint('51.47788', 0)

    with pytest.raises(InvalidInputError):
        GeodeticPoint(0, None)

    with pytest.raises(InvalidInputError):
        GeodeticPoint(float('nan'), 0)

    with pytest.raises(InvalidInputError):
        GeodeticPoint(0, 0, float('inf'))

    with pytest.raises(ValueError):
        GeodeticPoint(True, 0)


def test_geodetic_point_wrap():
    # Latitudes reflect back from the poles
    assert GeodeticPoint(91, 0).latitude == 89.
    assert GeodeticPoint(-91, 0).latitude == -89.
    assert GeodeticPoint(180, 0).latitude == 0.
    assert GeodeticPoint(271, 0).latitude == -89.

    # Longitudes wrap around the antimeridian
    assert GeodeticPoint(0, 181).longitude == -179.
    assert GeodeticPoint(0, -181).longitude == 179.
    assert GeodeticPoint(0, 361).longitude == 1.
    assert GeodeticPoint(0, 540).longitude == -180.

    # In-range values are untouched, including both ends of the range
    assert GeodeticPoint(90, 180).to_float() == (90., 180., 0.)
    assert GeodeticPoint(-90, -180).to_float() == (-90., -180., 0.)
    assert GeodeticPoint(45.123456789, 0).latitude == 45.123456789

    assert GeodeticPoint(91, 181) == GeodeticPoint(89, -179)


def test_geodetic_point_context():
    point = GeodeticPoint(52.2, 0.12, datum='OSGB36')
    assert point.datum == DATUMS['OSGB36']
    assert point.ellipsoid == ELLIPSOIDS['Airy1830']
    assert point.reference_frame is None
    assert point.epoch is None

    point = GeodeticPoint(52.2, 0.12, datum=DATUMS['ED50'])
    assert point.datum == DATUMS['ED50']

    # Epoch defaults to the frame's reference epoch
    point = GeodeticPoint(1, 2, reference_frame='ITRF2014')
    assert point.reference_frame == REFERENCE_FRAMES['ITRF2014']
    assert point.epoch == 2010.
    assert point.ellipsoid == ELLIPSOIDS['GRS80']

    point = GeodeticPoint(1, 2, reference_frame='ITRF2014', epoch=2012)
    assert point.epoch == 2012.

    with pytest.raises(InvalidInputError):
        # Datum and reference frame are exclusive
        GeodeticPoint(1, 2, datum='WGS84', reference_frame='ITRF2014')

    with pytest.raises(InvalidInputError):
        # Epoch without a reference frame
        GeodeticPoint(1, 2, epoch=2012)

    with pytest.raises(InvalidInputError):
        GeodeticPoint(1, 2, reference_frame='ITRF2014', epoch='2012')

    with pytest.raises(UnknownDatumError):
        GeodeticPoint(1, 2, datum='OSGB37')

    with pytest.raises(UnknownReferenceFrameError):
        GeodeticPoint(1, 2, reference_frame='ITRF2020')


def test_geodetic_point_immutable():
    point = GeodeticPoint(1, 2)

    with pytest.raises(AttributeError):
        point.latitude = 3.

    with pytest.raises(AttributeError):
        point._latitude = 3.

    with pytest.raises(AttributeError):
        point.new_attribute = 3.

    assert point.latitude == 1.


def test_geodetic_point_replace():
    point = GeodeticPoint(1, 2, 3, reference_frame='ITRF2014', epoch=2012)
    new = point.replace(latitude=91)
    assert new is not point
    assert new.to_float() == (89., 2., 3.)
    assert new.reference_frame == point.reference_frame
    assert new.epoch == 2012.

    # Original unchanged
    assert point.latitude == 1.

    new = point.replace(reference_frame=None, epoch=None, datum='OSGB36')
    assert new.datum == DATUMS['OSGB36']
    assert new.reference_frame is None

    with pytest.raises(InvalidInputError):
        point.replace(lat=2)

    with pytest.raises(InvalidInputError):
        point.replace(datum='OSGB36')


def test_geodetic_point_eq():
    assert GeodeticPoint(1, 2) == GeodeticPoint(1., 2., 0.)
    assert GeodeticPoint(1, 2) != GeodeticPoint(1, 2, 1)
    assert GeodeticPoint(1, 2) != GeodeticPoint(1, 2, datum='WGS84')
    assert GeodeticPoint(1, 2) != (1, 2)
    assert GeodeticPoint(1, 2, reference_frame='ITRF2014') == GeodeticPoint(
        1, 2, reference_frame='ITRF2014', epoch=2010
    )
    assert GeodeticPoint(1, 2, reference_frame='ITRF2014') != GeodeticPoint(
        1, 2, reference_frame='ITRF2014', epoch=2012
    )

    assert hash(GeodeticPoint(1, 2)) == hash(GeodeticPoint(1., 2.))
    assert len({GeodeticPoint(1, 2), GeodeticPoint(1, 2), GeodeticPoint(2, 1)}) == 2


def test_geodetic_point_equals():
    point = GeodeticPoint(1, 2)
    assert point.equals(GeodeticPoint(1, 2))
    assert not point.equals(GeodeticPoint(1 + 1e-9, 2))
    assert point.equals(GeodeticPoint(1 + 1e-9, 2), tolerance=1e-8)
    assert not point.equals(GeodeticPoint(1, 2, datum='OSGB36'), tolerance=1)

    with pytest.raises(InvalidInputError):
        point.equals((1, 2))


def test_geodetic_point_repr():
    assert repr(GeodeticPoint(1, 2)) == '<GeodeticPoint(1.0, 2.0, 0.0)>'
    assert repr(GeodeticPoint(1, 2, datum='OSGB36')) == '<GeodeticPoint(1.0, 2.0, 0.0) (OSGB36)>'
    assert repr(GeodeticPoint(1, 2, reference_frame='ITRF2014')) == (
        '<GeodeticPoint(1.0, 2.0, 0.0) (ITRF2014)>'
    )
    assert repr(GeodeticPoint(1, 2, reference_frame='ITRF2014', epoch=2012)) == (
        '<GeodeticPoint(1.0, 2.0, 0.0) (ITRF2014@2012.0)>'
    )


def test_cartesian_point_init():
    point = CartesianPoint(4027893.924, 307041.993, 4919474.294)
    assert point.x == 4027893.924
    assert point.y == 307041.993
    assert point.z == 4919474.294
    assert point.to_float() == (4027893.924, 307041.993, 4919474.294)
    assert tuple(point) == (4027893.924, 307041.993, 4919474.294)
    assert point.ellipsoid == ELLIPSOIDS['WGS84']

    point = CartesianPoint(1, 2, 3, reference_frame='ITRF2008')
    assert point.epoch == 2005.
    assert point.ellipsoid == ELLIPSOIDS['GRS80']

    with pytest.raises(InvalidInputError):
        CartesianPoint(1, 2, float('nan'))

    with pytest.raises(InvalidInputError):
        CartesianPoint(1, 2, '3')

    with pytest.raises(InvalidInputError):
        CartesianPoint(1, 2, 3, datum='WGS84', reference_frame='ITRF2014')

    with pytest.raises(InvalidInputError):
        CartesianPoint(1, 2, 3, epoch=2000)


def test_cartesian_point_immutable():
    point = CartesianPoint(1, 2, 3)

    with pytest.raises(AttributeError):
        point.x = 2.

    with pytest.raises(AttributeError):
        point._z = 2.


def test_cartesian_point_eq():
    assert CartesianPoint(1, 2, 3) == CartesianPoint(1., 2., 3.)
    assert CartesianPoint(1, 2, 3) != CartesianPoint(1, 2, 4)
    assert CartesianPoint(1, 2, 3) != CartesianPoint(1, 2, 3, datum='OSGB36')
    assert CartesianPoint(1, 2, 3) != (1, 2, 3)
    assert hash(CartesianPoint(1, 2, 3)) == hash(CartesianPoint(1., 2., 3.))


def test_cartesian_point_numpy():
    point = CartesianPoint(1, 2, 3, datum='OSGB36')
    np.testing.assert_array_equal(point.to_numpy(), np.array([1., 2., 3.]))

    new = CartesianPoint.from_numpy(np.array([4, 5, 6]), datum='OSGB36')
    assert new == CartesianPoint(4, 5, 6, datum='OSGB36')
    assert isinstance(new.x, float)

    with pytest.raises(InvalidInputError):
        CartesianPoint.from_numpy(np.array([1, 2]))

    with pytest.raises(InvalidInputError):
        CartesianPoint.from_numpy(np.array([[1, 2, 3]]))


def test_cartesian_point_replace():
    point = CartesianPoint(1, 2, 3, reference_frame='ITRF2014', epoch=2012)
    new = point.replace(z=4)
    assert new == CartesianPoint(1, 2, 4, reference_frame='ITRF2014', epoch=2012)

    new = point.replace(reference_frame='ITRF2008')
    assert new.reference_frame == REFERENCE_FRAMES['ITRF2008']
    assert new.epoch == 2012.

    with pytest.raises(InvalidInputError):
        point.replace(w=1)


def test_cartesian_point_to_str():
    point = CartesianPoint(4027893.924, 307041.993, 4919474.294)
    assert point.to_str() == '[4027894,307042,4919474]'
    assert point.to_str(2) == '[4027893.92,307041.99,4919474.29]'

    point = CartesianPoint(1.4, 2.6, 3, datum='OSGB36')
    assert point.to_str() == '[1,3,3](OSGB36)'

    point = CartesianPoint(1.4, 2.6, 3, reference_frame='ITRF2014')
    assert point.to_str() == '[1,3,3](ITRF2014)'

    point = CartesianPoint(1.4, 2.6, 3, reference_frame='ITRF2014', epoch=2012)
    assert point.to_str() == '[1,3,3](ITRF2014@2012.0)'


def test_cartesian_point_repr():
    assert repr(CartesianPoint(1, 2, 3)) == '<CartesianPoint(1.0, 2.0, 3.0)>'
    assert repr(CartesianPoint(1, 2, 3, datum='ED50')) == '<CartesianPoint(1.0, 2.0, 3.0) (ED50)>'
