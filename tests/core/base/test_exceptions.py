import pytest

from mathkit.core.base.exceptions import (
    MathKitError,
    ValidationError,
    DimensionMismatchError,
    NullArgumentError,
    NotStrictlyPositiveError,
    ConfigurationError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
    MaxCountExceededError,
    TooManyEvaluationsError,
    TooManyIterationsError,
    GeometryError,
    validate_not_none,
    validate_positive,
    validate_dimension,
)


class TestMathKitError:
    def test_message_only(self):
        err = MathKitError("something failed")
        assert str(err) == "something failed"
        assert err.details == {}
        assert err.cause is None

    def test_details_and_cause_rendered(self):
        cause = ValueError("bad value")
        err = MathKitError("wrapped", details={"key": 1}, cause=cause)
        text = str(err)
        assert "wrapped" in text
        assert "key=1" in text
        assert "Caused by: bad value" in text

    def test_get_detail(self):
        err = MathKitError("x", details={"size": 3})
        assert err.get_detail("size") == 3
        assert err.get_detail("missing", "default") == "default"


class TestHierarchy:
    @pytest.mark.parametrize("error_type", [
        ValidationError, ConfigurationError, NumericalError, GeometryError,
    ])
    def test_direct_subclasses(self, error_type):
        assert issubclass(error_type, MathKitError)

    def test_validation_family(self):
        assert issubclass(DimensionMismatchError, ValidationError)
        assert issubclass(NullArgumentError, ValidationError)
        assert issubclass(NotStrictlyPositiveError, ValidationError)

    def test_numerical_family(self):
        assert issubclass(SingularMatrixError, NumericalError)
        assert issubclass(ConvergenceError, NumericalError)

    def test_count_family(self):
        assert issubclass(TooManyEvaluationsError, MaxCountExceededError)
        assert issubclass(TooManyIterationsError, MaxCountExceededError)
        assert not issubclass(MaxCountExceededError, NumericalError)


class TestSpecificErrors:
    def test_dimension_mismatch_fields(self):
        err = DimensionMismatchError(3, 2, field="start")
        assert err.actual == 3
        assert err.expected == 2
        assert err.field == "start"
        assert "start" in str(err)
        assert err.get_detail("actual") == 3

    def test_dimension_mismatch_custom_message(self):
        err = DimensionMismatchError(3, 2, message="custom text")
        assert err.message == "custom text"

    def test_singular_matrix_threshold(self):
        err = SingularMatrixError(threshold=1e-11)
        assert err.threshold == 1e-11
        assert err.get_detail("threshold") == 1e-11

    def test_too_many_evaluations(self):
        err = TooManyEvaluationsError(10)
        assert err.max_count == 10
        assert "evaluations" in str(err)

    def test_too_many_iterations(self):
        err = TooManyIterationsError(5)
        assert err.max_count == 5
        assert "iterations" in str(err)

    def test_geometry_error_operation(self):
        err = GeometryError("broken tree", operation="merge")
        assert err.operation == "merge"

    def test_configuration_error_details(self):
        err = ConfigurationError("bad", config_file="a.yaml", parameter="x")
        assert err.get_detail("config_file") == "a.yaml"
        assert err.get_detail("parameter") == "x"


class TestHelpers:
    def test_validate_not_none(self):
        assert validate_not_none(0, "value") == 0
        with pytest.raises(NullArgumentError):
            validate_not_none(None, "value")

    def test_validate_positive(self):
        assert validate_positive(2, "limit") == 2
        with pytest.raises(NotStrictlyPositiveError):
            validate_positive(0, "limit")
        with pytest.raises(NotStrictlyPositiveError):
            validate_positive(-1.5, "limit")

    def test_validate_dimension(self):
        validate_dimension(3, 3, "vector")
        validate_dimension((2, 3), [2, 3], "matrix")
        with pytest.raises(DimensionMismatchError):
            validate_dimension(3, 4, "vector")
        with pytest.raises(DimensionMismatchError):
            validate_dimension((2, 3), (3, 2), "matrix")
