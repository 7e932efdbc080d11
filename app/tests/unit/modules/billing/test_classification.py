"""Unit tests for charge outcome classification."""

from unittest.mock import MagicMock

import pytest

from infrastructure.operations import OperationStatus
from modules.billing.classification import (
    ErrorKind,
    charge_once,
    classify_charge_error,
    failure_reason_for,
    is_retryable,
)
from modules.billing.domain.errors import (
    CurrencyMismatchError,
    CustomerNotFoundError,
    NetworkError,
)
from modules.billing.domain.models import FailureReason

pytestmark = pytest.mark.unit


class TestClassifyChargeError:
    def test_network_error_is_transient(self):
        result = classify_charge_error(NetworkError())

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == ErrorKind.NETWORK

    def test_customer_not_found_is_permanent(self):
        result = classify_charge_error(CustomerNotFoundError(999))

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == ErrorKind.CUSTOMER_NOT_FOUND
        assert "999" in result.message

    def test_currency_mismatch_is_permanent(self):
        result = classify_charge_error(CurrencyMismatchError(123, 999))

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == ErrorKind.CURRENCY_MISMATCH

    @pytest.mark.parametrize("exc", [RuntimeError("boom"), KeyError("id"), ValueError()])
    def test_anything_else_is_unknown(self, exc):
        result = classify_charge_error(exc)

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == ErrorKind.UNKNOWN
        assert type(exc).__name__ in result.message


class TestIsRetryable:
    def test_only_network_is_retryable(self):
        assert is_retryable(ErrorKind.NETWORK) is True
        assert is_retryable("NETWORK") is True

    @pytest.mark.parametrize(
        "code",
        [ErrorKind.CUSTOMER_NOT_FOUND, ErrorKind.CURRENCY_MISMATCH, ErrorKind.UNKNOWN, None],
    )
    def test_other_kinds_are_not_retryable(self, code):
        assert is_retryable(code) is False


class TestFailureReasonFor:
    @pytest.mark.parametrize(
        "kind,reason",
        [
            (ErrorKind.CUSTOMER_NOT_FOUND, FailureReason.CUSTOMER_NOT_FOUND),
            (ErrorKind.CURRENCY_MISMATCH, FailureReason.CURRENCY_MISMATCH),
            (ErrorKind.NETWORK, FailureReason.NETWORK),
            (ErrorKind.UNKNOWN, FailureReason.UNKNOWN),
        ],
    )
    def test_maps_every_kind(self, kind, reason):
        assert failure_reason_for(kind) == reason

    @pytest.mark.parametrize("code", [None, "", "SOMETHING_ELSE"])
    def test_unrecognized_codes_map_to_unknown(self, code):
        assert failure_reason_for(code) == FailureReason.UNKNOWN


class TestChargeOnce:
    def test_accepted_charge(self, invoice_factory):
        provider = MagicMock()
        provider.charge.return_value = True
        invoice = invoice_factory()

        result = charge_once(provider, invoice)

        assert result.is_success
        assert result.data is True
        provider.charge.assert_called_once_with(invoice)

    def test_declined_charge_is_not_an_error(self, invoice_factory):
        provider = MagicMock()
        provider.charge.return_value = False

        result = charge_once(provider, invoice_factory())

        assert result.is_success
        assert result.data is False

    def test_provider_exception_becomes_result(self, invoice_factory):
        provider = MagicMock()
        provider.charge.side_effect = NetworkError()

        result = charge_once(provider, invoice_factory())

        assert not result.is_success
        assert result.error_code == ErrorKind.NETWORK
