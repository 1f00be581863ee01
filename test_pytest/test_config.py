import pytest

from tsdecomposition import InvalidArgumentError, MstlParams, StlParams


def test_defaults_for_weekly_period():
    config = StlParams().resolve(7)

    assert config.seasonal_length == 7
    assert config.trend_length == 15
    assert config.low_pass_length == 7
    assert (config.seasonal_degree, config.trend_degree, config.low_pass_degree) == (0, 1, 1)
    assert (config.seasonal_jump, config.trend_jump, config.low_pass_jump) == (1, 2, 1)
    assert (config.inner_loops, config.outer_loops) == (2, 0)
    assert config.robust is False


def test_defaults_for_monthly_period():
    config = StlParams().resolve(12)

    assert (config.seasonal_length, config.trend_length, config.low_pass_length) == (13, 21, 13)
    assert (config.seasonal_jump, config.trend_jump, config.low_pass_jump) == (2, 3, 2)


def test_smallest_period_gets_minimal_windows():
    config = StlParams().resolve(2)

    assert config.seasonal_length == 3
    assert config.low_pass_length == 3
    assert config.trend_length % 2 == 1


def test_robust_defaults():
    config = StlParams(robust=True).resolve(7)

    assert (config.inner_loops, config.outer_loops) == (1, 15)


def test_robust_raises_outer_loops_to_one():
    config = StlParams(robust=True, outer_loops=0).resolve(7)

    assert config.outer_loops == 1


def test_outer_loops_ignored_without_robust():
    config = StlParams(outer_loops=5).resolve(7)

    assert config.outer_loops == 0


def test_explicit_values_are_kept():
    params = StlParams(
        seasonal_length=9,
        trend_length=25,
        low_pass_length=11,
        seasonal_degree=1,
        trend_degree=0,
        low_pass_degree=0,
        seasonal_jump=3,
        trend_jump=5,
        low_pass_jump=4,
        inner_loops=4,
    )

    config = params.resolve(10)

    assert config.to_dict() == {
        "period": 10,
        "seasonal_length": 9,
        "trend_length": 25,
        "low_pass_length": 11,
        "seasonal_degree": 1,
        "trend_degree": 0,
        "low_pass_degree": 0,
        "seasonal_jump": 3,
        "trend_jump": 5,
        "low_pass_jump": 4,
        "inner_loops": 4,
        "outer_loops": 0,
        "robust": False,
    }


def test_low_pass_degree_follows_trend_degree():
    assert StlParams(trend_degree=0).resolve(7).low_pass_degree == 0


@pytest.mark.parametrize("name", ["seasonal_length", "trend_length", "low_pass_length"])
def test_even_window_raises(name):
    with pytest.raises(InvalidArgumentError, match=f"{name} must be odd"):
        StlParams(**{name: 8})


@pytest.mark.parametrize("name", ["seasonal_degree", "trend_degree", "low_pass_degree"])
def test_invalid_degree_raises(name):
    with pytest.raises(InvalidArgumentError, match=f"{name} must be 0 or 1"):
        StlParams(**{name: 2})


def test_jump_larger_than_window_raises():
    with pytest.raises(InvalidArgumentError):
        StlParams(seasonal_length=5, seasonal_jump=6)

    # derived window: low_pass_length for period 7 is 7
    with pytest.raises(InvalidArgumentError):
        StlParams(low_pass_jump=8).resolve(7)


def test_invalid_period_raises_on_resolve():
    with pytest.raises(InvalidArgumentError, match="period must be greater than 1"):
        StlParams().resolve(1)


@pytest.mark.parametrize("changes", [{"robust": "yes"}, {"inner_loops": -1}, {"trend_jump": 0}])
def test_invalid_field_types_raise(changes):
    with pytest.raises(InvalidArgumentError):
        StlParams(**changes)


def test_from_dict_ignores_none_and_rejects_unknown_keys():
    params = StlParams.from_dict({"robust": True, "seasonal_length": None})

    assert params.robust is True
    assert params.seasonal_length is None

    with pytest.raises(InvalidArgumentError, match="Unknown STL parameters"):
        StlParams.from_dict({"seasonal_window": 7})


def test_with_options_returns_new_instance():
    params = StlParams()

    updated = params.with_options(robust=True, seasonal_length=11)

    assert params.robust is False
    assert params.seasonal_length is None
    assert updated.robust is True
    assert updated.seasonal_length == 11

    with pytest.raises(InvalidArgumentError):
        params.with_options(seasonal_length=10)


def test_to_dict_round_trips():
    params = StlParams(robust=True, trend_length=31)

    assert StlParams.from_dict(params.to_dict()) == params


def test_mstl_defaults():
    params = MstlParams()

    assert params.iterations == 2
    assert params.lmbda is None
    assert params.seasonal_lengths is None
    assert params.stl_params == StlParams()


def test_mstl_component_seasonal_lengths():
    params = MstlParams()

    assert params.component_params(position=1, rank=0).seasonal_length == 11
    assert params.component_params(position=0, rank=1).seasonal_length == 15

    explicit = MstlParams(seasonal_lengths=[9, 21])
    assert explicit.seasonal_lengths == (9, 21)
    assert explicit.component_params(position=1, rank=0).seasonal_length == 21


@pytest.mark.parametrize("lmbda", [-0.1, 1.5, float("nan")])
def test_mstl_lambda_out_of_range_raises(lmbda):
    with pytest.raises(InvalidArgumentError, match="lambda must be between 0 and 1"):
        MstlParams(lmbda=lmbda)


def test_mstl_invalid_options_raise():
    with pytest.raises(InvalidArgumentError):
        MstlParams(iterations=0)
    with pytest.raises(InvalidArgumentError):
        MstlParams(seasonal_lengths=[7, 8])
    with pytest.raises(InvalidArgumentError):
        MstlParams(stl_params={"robust": True})


@pytest.mark.parametrize("key", ["lambda", "lmbda"])
def test_mstl_from_dict_accepts_lambda_aliases(key):
    params = MstlParams.from_dict({key: 0.5, "iterations": 3, "robust": True})

    assert params.lmbda == 0.5
    assert params.iterations == 3
    assert params.stl_params.robust is True


def test_mstl_from_dict_rejects_both_lambda_keys():
    with pytest.raises(InvalidArgumentError):
        MstlParams.from_dict({"lambda": 0.5, "lmbda": 0.5})


def test_mstl_with_options_forwards_stl_fields():
    params = MstlParams().with_options(iterations=4, robust=True, trend_length=21)

    assert params.iterations == 4
    assert params.stl_params.robust is True
    assert params.stl_params.trend_length == 21
