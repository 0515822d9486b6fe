import pydantic
import pytest

from geodetics import REFERENCE_FRAMES, TRANSFORM_PARAMS, TransformParams


def test_transform_params_init():
    tx = TRANSFORM_PARAMS['ITRF2014→ITRF2008']
    assert tx.source == 'ITRF2014'
    assert tx.target == 'ITRF2008'
    assert tx.key == 'ITRF2014→ITRF2008'
    assert tx.epoch == 2010.0
    assert tx.params == (1.6, 1.9, 2.4, -0.02, 0.00, 0.00, 0.00)
    assert tx.rates == (0.0, 0.0, -0.1, 0.03, 0.00, 0.00, 0.00)
    assert repr(tx) == '<TransformParams ITRF2014→ITRF2008@2010.0>'

    with pytest.raises(pydantic.ValidationError):
        TransformParams('A', 'B', 2000.0, (1, 2, 3), (0, 0, 0, 0, 0, 0, 0))


def test_transform_params_registry():
    assert len(TRANSFORM_PARAMS) == 18

    for key, tx in TRANSFORM_PARAMS.items():
        assert tx.key == key
        assert tx.source in REFERENCE_FRAMES
        assert tx.target in REFERENCE_FRAMES

    # No direct parameters published
    assert 'ITRF2014→GDA94' not in TRANSFORM_PARAMS

    with pytest.raises(TypeError):
        TRANSFORM_PARAMS['A→B'] = TRANSFORM_PARAMS['ITRF2014→ITRF2008']


def test_transform_params_reversed():
    tx = TRANSFORM_PARAMS['ITRF2014→ETRF2000']
    rev = tx.reversed()

    assert rev.key == 'ETRF2000→ITRF2014'
    assert rev.epoch == tx.epoch
    assert rev.params == tuple(-p for p in tx.params)
    assert rev.rates == tuple(-r for r in tx.rates)
    assert rev != tx

    for tx in TRANSFORM_PARAMS.values():
        assert tx.reversed().reversed() == tx
        assert hash(tx.reversed().reversed()) == hash(tx)


def test_transform_params_eq():
    tx = TransformParams('A', 'B', 2000.0, (1, 2, 3, 4, 5, 6, 7), (0, 0, 0, 0, 0, 0, 0))
    assert tx == TransformParams('A', 'B', 2000.0, (1, 2, 3, 4, 5, 6, 7), (0, 0, 0, 0, 0, 0, 0))
    assert tx != TransformParams('A', 'B', 2001.0, (1, 2, 3, 4, 5, 6, 7), (0, 0, 0, 0, 0, 0, 0))
    assert tx != 'A→B'
