"""Tests for ProvisionService — validation, dispatch, and error mapping."""

from __future__ import annotations

from typing import Any

import pytest

from svcat.domain.request import FlatParameters, ProvisionRequest, StructuredParameters
from svcat.infrastructure.provisioner import ProvisionerError
from svcat.services.provision import ProvisionService
from tests.conftest import RecordingProvisioner


def _provision(provisioner: RecordingProvisioner, args: list[str], **kwargs: Any) -> Any:
    kwargs.setdefault("class_name", "mysqldb")
    kwargs.setdefault("plan_name", "free")
    return ProvisionService(provisioner).provision(args, **kwargs)


class TestProvisionSuccess:
    def test_flat_parameters_scenario(self, provisioner: RecordingProvisioner) -> None:
        result = _provision(
            provisioner,
            ["myinst"],
            raw_params=("location=eastus", "sslEnforcement=disabled"),
        )
        assert result.ok, result.error
        assert result.op == "provision"
        assert len(provisioner.calls) == 1
        call = provisioner.calls[0]
        assert call["namespace"] == "default"
        assert call["instance_name"] == "myinst"
        assert call["class_name"] == "mysqldb"
        assert call["plan_name"] == "free"
        assert call["parameters"] == FlatParameters(
            values={"location": "eastus", "sslEnforcement": "disabled"}
        )
        assert call["secrets"] == {}

    def test_result_data_is_instance(self, provisioner: RecordingProvisioner) -> None:
        result = _provision(provisioner, ["myinst"], namespace="prod", raw_secrets=("s[k]",))
        assert result.data["name"] == "myinst"
        assert result.data["namespace"] == "prod"
        assert result.data["secrets"] == {"s": "k"}
        assert result.data["status"] == "NotReady - ProvisionRequestInFlight"

    def test_json_parameters(self, provisioner: RecordingProvisioner) -> None:
        result = _provision(provisioner, ["myinst"], json_params='{"encrypt":true}')
        assert result.ok
        assert provisioner.calls[0]["parameters"] == StructuredParameters(value={"encrypt": True})

    def test_duplicate_secret_warning(self, provisioner: RecordingProvisioner) -> None:
        result = _provision(provisioner, ["myinst"], raw_secrets=("s[a]", "s[b]"))
        assert result.ok
        assert provisioner.calls[0]["secrets"] == {"s": "b"}
        assert result.warnings == ["Secret 's' given 2 times, using key 'b'"]


class TestProvisionValidationFailures:
    def test_missing_instance_name(self, provisioner: RecordingProvisioner) -> None:
        result = _provision(provisioner, [])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "USAGE_ERROR"
        assert result.error.message == "an instance name is required"
        assert provisioner.calls == []

    def test_mutually_exclusive_flags(self, provisioner: RecordingProvisioner) -> None:
        result = _provision(
            provisioner, ["myinst"], json_params='{"encrypt":true}', raw_params=("foo=bar",)
        )
        assert result.error is not None
        assert result.error.code == "USAGE_ERROR"
        assert "--params-json cannot be used with --param" in result.error.message
        assert provisioner.calls == []

    def test_bad_secret(self, provisioner: RecordingProvisioner) -> None:
        result = _provision(provisioner, ["myinst"], raw_secrets=("badformat",))
        assert result.error is not None
        assert result.error.code == "INVALID_PARAMETER"
        assert result.error.detail == {"flag": "--secret", "value": "badformat"}
        assert "badformat" in result.error.message
        assert provisioner.calls == []

    def test_bad_json(self, provisioner: RecordingProvisioner) -> None:
        result = _provision(provisioner, ["myinst"], json_params="{")
        assert result.error is not None
        assert result.error.code == "INVALID_PARAMETER"
        assert result.error.detail["flag"] == "--params-json"


class TestDispatch:
    def _request(self) -> ProvisionRequest:
        return ProvisionRequest(instance_name="myinst", class_name="mysqldb", plan_name="free")

    def test_single_call(self, provisioner: RecordingProvisioner) -> None:
        result = ProvisionService(provisioner).dispatch(self._request())
        assert result.ok
        assert len(provisioner.calls) == 1

    def test_collaborator_error_forwarded_unchanged(self) -> None:
        provisioner = RecordingProvisioner(error="provision request failed (already exists)")
        result = ProvisionService(provisioner).dispatch(self._request())
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "PROVISION_FAILED"
        assert result.error.message == "provision request failed (already exists)"
        assert result.error.detail == {"namespace": "default", "name": "myinst"}
        assert len(provisioner.calls) == 1

    def test_unexpected_exception_propagates(self) -> None:
        class Exploding:
            def provision(self, *args: Any) -> Any:
                raise KeyError("boom")

        with pytest.raises(KeyError):
            ProvisionService(Exploding()).dispatch(self._request())

    def test_collaborator_cannot_modify_request(self) -> None:
        class Meddling:
            def provision(
                self,
                namespace: str,
                instance_name: str,
                class_name: str,
                plan_name: str,
                parameters: Any,
                secrets: dict[str, str],
            ) -> Any:
                parameters.values["location"] = "westus"
                secrets["injected"] = "key"
                raise ProvisionerError("provision request failed (rejected)")

        request = ProvisionRequest(
            instance_name="myinst",
            class_name="mysqldb",
            plan_name="free",
            parameters=FlatParameters(values={"location": "eastus"}),
            secrets={"s": "k"},
        )
        result = ProvisionService(Meddling()).dispatch(request)

        assert not result.ok
        assert request.parameters == FlatParameters(values={"location": "eastus"})
        assert request.secrets == {"s": "k"}
