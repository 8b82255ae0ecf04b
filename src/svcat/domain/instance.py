"""Instance — the provisioned service instance returned by the catalog."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class InstanceCondition(BaseModel):
    """One entry of a ServiceInstance's ``status.conditions``."""

    model_config = {"frozen": True}

    type: str
    status: str = "Unknown"
    reason: str = ""
    message: str = ""


class Instance(BaseModel):
    """A provisioned unit of a managed service, identified by namespace and name."""

    model_config = {"frozen": True}

    name: str
    namespace: str
    uid: str = ""
    class_name: str = ""
    plan_name: str = ""
    parameters: Any = None
    secrets: dict[str, str] = Field(default_factory=dict)
    conditions: list[InstanceCondition] = Field(default_factory=list)

    @property
    def status(self) -> str:
        """Short status from the most recent condition.

        ``Ready`` when the condition holds, ``NotReady`` when it does not,
        and an empty string while the catalog has reported nothing yet.
        """
        if not self.conditions:
            return ""
        last = self.conditions[-1]
        label = last.type if last.status == "True" else f"Not{last.type}"
        if last.reason:
            return f"{label} - {last.reason}"
        return label

    @classmethod
    def from_manifest(cls, manifest: dict[str, Any]) -> Instance:
        """Build an Instance from a ``ServiceInstance`` object as returned by the API."""
        metadata = manifest.get("metadata") or {}
        spec = manifest.get("spec") or {}
        status = manifest.get("status") or {}

        secrets: dict[str, str] = {}
        for source in spec.get("parametersFrom") or []:
            ref = source.get("secretKeyRef") or {}
            if ref.get("name") and ref.get("key"):
                secrets[ref["name"]] = ref["key"]

        return cls(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", ""),
            uid=metadata.get("uid", ""),
            class_name=spec.get("clusterServiceClassExternalName", ""),
            plan_name=spec.get("clusterServicePlanExternalName", ""),
            parameters=spec.get("parameters"),
            secrets=secrets,
            conditions=[InstanceCondition.model_validate(c) for c in status.get("conditions") or []],
        )

    def to_data(self) -> dict[str, Any]:
        """Plain dict for ServiceResult.data, including the derived status."""
        data = self.model_dump(mode="json", exclude={"conditions"})
        data["status"] = self.status
        return data
