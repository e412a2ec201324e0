# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

POLICY_API_VERSION = "policy.open-cluster-management.io/v1"
POLICY_KIND = "Policy"
CONFIG_POLICY_KIND = "ConfigurationPolicy"
PLACEMENT_RULE_API_VERSION = "apps.open-cluster-management.io/v1"
PLACEMENT_RULE_KIND = "PlacementRule"
PLACEMENT_BINDING_API_VERSION = "policy.open-cluster-management.io/v1"
PLACEMENT_BINDING_KIND = "PlacementBinding"

ANNOTATION_PREFIX = "policy.open-cluster-management.io/"

CLUSTER_CONDITIONS = [{"status": "True", "type": "ManagedClusterConditionAvailable"}]

MANIFEST_EXTENSIONS = (".yaml", ".yml")

# Built-in policy defaults, applied when neither policyDefaults nor the policy sets a value.
DEFAULT_CATEGORIES = ["CM Configuration Management"]
DEFAULT_CONTROLS = ["CM-2 Baseline Configuration"]
DEFAULT_STANDARDS = ["NIST SP 800-53"]
DEFAULT_COMPLIANCE_TYPE = "musthave"
DEFAULT_REMEDIATION_ACTION = "inform"
DEFAULT_SEVERITY = "low"

BINDING_NAME_PREFIX = "binding-"
PLACEMENT_NAME_PREFIX = "placement-"
