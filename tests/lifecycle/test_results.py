import pytest

from app.core.exceptions import LifecycleHTTPException, raise_for_result
from app.shared.lifecycle import ErrorCode, LifecycleError, Result


def test_result_consistency_is_enforced():
    with pytest.raises(ValueError):
        Result(ok=True, error=LifecycleError.conflict("x"))
    with pytest.raises(ValueError):
        Result(ok=False)


def test_error_to_dict_omits_empty_fields():
    error = LifecycleError.not_found("No existe")
    assert error.to_dict() == {"error_code": "NOT_FOUND", "message": "No existe", "field": "Id"}


@pytest.mark.parametrize("error,status_code", [
    (LifecycleError.not_found("x"), 404),
    (LifecycleError.bad_request("x"), 400),
    (LifecycleError.invalid_transition("x"), 400),
    (LifecycleError.conflict("x"), 409),
])
def test_raise_for_result_maps_codes(error, status_code):
    with pytest.raises(LifecycleHTTPException) as exc_info:
        raise_for_result(Result.failure(error))
    assert exc_info.value.status_code == status_code
    assert exc_info.value.detail["success"] is False
    assert exc_info.value.detail["error_code"] == error.code.value


def test_raise_for_result_passes_success_through():
    result = Result.success(5)
    assert raise_for_result(result) is result
    assert ErrorCode("CONFLICT") is ErrorCode.CONFLICT
