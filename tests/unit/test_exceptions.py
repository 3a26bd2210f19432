"""Unit tests for custom exception classes."""

import pytest

from airdrop_deployments.exceptions import (
    ArgumentError,
    ArtifactNotFoundError,
    BuildError,
    ConfigCorruptionError,
    DeployerError,
    InvalidConfigurationError,
    LinkError,
    MissingRequiredValueError,
    RpcError,
    StepOrderError,
    SubmissionError,
)

SIMPLE_EXCEPTIONS = [
    DeployerError,
    ConfigCorruptionError,
    StepOrderError,
    ArtifactNotFoundError,
    ArgumentError,
    RpcError,
    SubmissionError,
    BuildError,
]


class TestExceptionCatching:
    """Test that exceptions can be caught as their base types."""

    def test_catch_artifact_not_found_as_file_not_found_error(self):
        with pytest.raises(FileNotFoundError):
            raise ArtifactNotFoundError("test")

    @pytest.mark.parametrize(
        "exc_class", [ConfigCorruptionError, StepOrderError, ArgumentError]
    )
    def test_catch_validation_errors_as_value_error(self, exc_class):
        with pytest.raises(ValueError):
            raise exc_class("test")

    def test_catch_missing_value_as_value_error(self):
        with pytest.raises(ValueError):
            raise MissingRequiredValueError(["privateKey"])

    def test_catch_invalid_configuration_as_value_error(self):
        with pytest.raises(ValueError):
            raise InvalidConfigurationError(["privateKey"])

    def test_catch_link_error_as_value_error(self):
        with pytest.raises(ValueError):
            raise LinkError(["__$deadbeef$__"])

    @pytest.mark.parametrize("exc_class", [RpcError, SubmissionError, BuildError])
    def test_catch_runtime_failures_as_runtime_error(self, exc_class):
        with pytest.raises(RuntimeError):
            raise exc_class("test")

    def test_catch_all_as_deployer_error(self):
        """Test that all custom exceptions can be caught as DeployerError."""
        exceptions = [exc_class("test") for exc_class in SIMPLE_EXCEPTIONS]
        exceptions += [MissingRequiredValueError(["groupId"]), LinkError(["__$deadbeef$__"])]
        exceptions.append(InvalidConfigurationError(["erc20Address"]))

        for exc in exceptions:
            with pytest.raises(DeployerError):
                raise exc


class TestExceptionCreation:
    """Test creating exceptions and the data they carry."""

    def test_exceptions_accept_string_messages(self):
        for exc_class in SIMPLE_EXCEPTIONS:
            exc = exc_class("test message")
            assert str(exc) == "test message"

    def test_step_defaults_to_none(self):
        exc = SubmissionError("reverted")
        assert exc.step is None

        exc.step = "worldIDAirdrop"
        assert exc.step == "worldIDAirdrop"

    def test_missing_value_lists_keys(self):
        exc = MissingRequiredValueError(["privateKey", "ethereumRpcUrl"])

        assert exc.keys == ["privateKey", "ethereumRpcUrl"]
        assert str(exc) == "Missing required configuration: privateKey, ethereumRpcUrl"

    def test_invalid_configuration_lists_keys(self):
        exc = InvalidConfigurationError(["erc20Address", "holderAddress"])

        assert exc.keys == ["erc20Address", "holderAddress"]
        assert str(exc) == "Invalid configuration: erc20Address, holderAddress"

    def test_link_error_sorts_and_deduplicates_placeholders(self):
        exc = LinkError(["__$bb$__", "__$aa$__", "__$bb$__"])

        assert exc.placeholders == ["__$aa$__", "__$bb$__"]
        assert "__$aa$__, __$bb$__" in str(exc)

    def test_link_error_custom_message(self):
        exc = LinkError(["__$aa$__"], "library MathLib not deployed")

        assert str(exc) == "library MathLib not deployed"
        assert exc.placeholders == ["__$aa$__"]
