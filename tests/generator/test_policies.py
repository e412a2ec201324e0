# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for Policy document construction.
"""

import pytest

from policygenerator.generator.config import GeneratorConfig, Manifest, NamespaceSelector, PolicyConfig, PolicyDefaults
from policygenerator.generator.defaults import apply_defaults
from policygenerator.generator.errors import ConfigError, FormatError
from policygenerator.generator.policies import build_policy_document


def _defaulted(policy: PolicyConfig, **defaults) -> PolicyConfig:
    config = GeneratorConfig(policy_defaults=PolicyDefaults(namespace="my-policies", **defaults), policies=[policy])
    return apply_defaults(config).policies[0]


def _object_templates(document):
    return document["spec"]["policy-templates"][0]["objectDefinition"]["spec"]["object-templates"]


class TestBuildPolicyDocument:
    """Test the Policy document layout."""

    def test_single_manifest(self, configmap_path, configmap):
        policy = _defaulted(PolicyConfig(name="policy-app-config", manifests=[Manifest(path=str(configmap_path))]))

        document = build_policy_document(policy, "my-policies")

        assert document == {
            "apiVersion": "policy.open-cluster-management.io/v1",
            "kind": "Policy",
            "metadata": {
                "annotations": {
                    "policy.open-cluster-management.io/categories": "CM Configuration Management",
                    "policy.open-cluster-management.io/controls": "CM-2 Baseline Configuration",
                    "policy.open-cluster-management.io/standards": "NIST SP 800-53",
                },
                "name": "policy-app-config",
                "namespace": "my-policies",
            },
            "spec": {
                "disabled": False,
                "policy-templates": [
                    {
                        "objectDefinition": {
                            "apiVersion": "policy.open-cluster-management.io/v1",
                            "kind": "ConfigurationPolicy",
                            "metadata": {"name": "policy-app-config"},
                            "spec": {
                                "object-templates": [{"complianceType": "musthave", "objectDefinition": configmap}],
                                "remediationAction": "inform",
                                "severity": "low",
                            },
                        }
                    }
                ],
                "remediationAction": "inform",
            },
        }

    def test_annotations_are_comma_joined(self, configmap_path):
        policy = _defaulted(
            PolicyConfig(
                name="p",
                manifests=[Manifest(path=str(configmap_path))],
                categories=["CM Configuration Management", "AC Access Control"],
                standards=[],
            )
        )

        annotations = build_policy_document(policy, "ns")["metadata"]["annotations"]

        assert annotations["policy.open-cluster-management.io/categories"] == (
            "CM Configuration Management,AC Access Control"
        )
        assert annotations["policy.open-cluster-management.io/standards"] == ""

    def test_directory_manifest(self, tmp_path, write_yaml, configmap):
        manifests = tmp_path / "manifests"
        write_yaml(manifests / "configmap.yaml", configmap)
        write_yaml(manifests / "configmap2.yml", configmap)
        (manifests / "README.md").write_text("not a manifest")

        policy = _defaulted(PolicyConfig(name="p", manifests=[Manifest(path=str(manifests))]))
        templates = _object_templates(build_policy_document(policy, "ns"))

        assert templates == [
            {"complianceType": "musthave", "objectDefinition": configmap},
            {"complianceType": "musthave", "objectDefinition": configmap},
        ]

    def test_empty_files_are_skipped(self, tmp_path, configmap_path):
        empty = tmp_path / "empty.yaml"
        empty.write_text("")
        policy = _defaulted(
            PolicyConfig(name="p", manifests=[Manifest(path=str(empty)), Manifest(path=str(configmap_path))])
        )

        assert len(_object_templates(build_policy_document(policy, "ns"))) == 1

    def test_no_documents_is_an_error(self, tmp_path):
        empty_dir = tmp_path / "empty"
        empty_dir.mkdir()
        policy = _defaulted(PolicyConfig(name="policy-app-config", manifests=[Manifest(path=str(empty_dir))]))

        with pytest.raises(ConfigError, match="must specify at least one non-empty manifest file"):
            build_policy_document(policy, "ns")

    def test_invalid_manifest(self, tmp_path):
        path = tmp_path / "configmap.yaml"
        path.write_text("$ not Yaml!")
        policy = _defaulted(PolicyConfig(name="p", manifests=[Manifest(path=str(path))]))

        with pytest.raises(FormatError):
            build_policy_document(policy, "ns")

    def test_policy_compliance_type(self, configmap_path):
        policy = _defaulted(
            PolicyConfig(name="p", manifests=[Manifest(path=str(configmap_path))]), compliance_type="mustnothave"
        )

        templates = _object_templates(build_policy_document(policy, "ns"))

        assert templates[0]["complianceType"] == "mustnothave"

    def test_object_template_keeps_own_compliance_type(self, tmp_path, write_yaml, configmap):
        path = write_yaml(
            tmp_path / "templates.yaml",
            {"complianceType": "mustonlyhave", "objectDefinition": configmap},
            {"objectDefinition": configmap},
        )
        policy = _defaulted(PolicyConfig(name="p", manifests=[Manifest(path=str(path))]))

        templates = _object_templates(build_policy_document(policy, "ns"))

        assert [t["complianceType"] for t in templates] == ["mustonlyhave", "musthave"]
        assert templates[1]["objectDefinition"] == configmap

    def test_disabled_and_remediation(self, configmap_path):
        policy = _defaulted(
            PolicyConfig(
                name="p", manifests=[Manifest(path=str(configmap_path))], disabled=True, remediation_action="enforce"
            )
        )

        document = build_policy_document(policy, "ns")

        assert document["spec"]["disabled"] is True
        assert document["spec"]["remediationAction"] == "enforce"
        assert document["spec"]["policy-templates"][0]["objectDefinition"]["spec"]["remediationAction"] == "enforce"


class TestNamespaceSelector:
    """Test namespaceSelector rendering on the ConfigurationPolicy."""

    def _config_policy_spec(self, policy):
        return build_policy_document(policy, "ns")["spec"]["policy-templates"][0]["objectDefinition"]["spec"]

    def test_omitted_when_unset(self, configmap_path):
        policy = _defaulted(PolicyConfig(name="p", manifests=[Manifest(path=str(configmap_path))]))

        assert "namespaceSelector" not in self._config_policy_spec(policy)

    def test_inherited_from_defaults(self, configmap_path):
        policy = _defaulted(
            PolicyConfig(name="p", manifests=[Manifest(path=str(configmap_path))]),
            namespace_selector=NamespaceSelector(include=["default"], exclude=["kube-*"]),
        )

        assert self._config_policy_spec(policy)["namespaceSelector"] == {
            "exclude": ["kube-*"],
            "include": ["default"],
        }

    def test_only_non_empty_lists(self, configmap_path):
        policy = _defaulted(
            PolicyConfig(
                name="p",
                manifests=[Manifest(path=str(configmap_path))],
                namespace_selector=NamespaceSelector(include=["app"], exclude=[]),
            )
        )

        assert self._config_policy_spec(policy)["namespaceSelector"] == {"include": ["app"]}
