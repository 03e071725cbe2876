import copy

import pytest

from infrabuilder.config import ClusterSpec, Config
from infrabuilder.constants import InstanceGroupRole
from infrabuilder.exceptions import (
    ConfigFileMissingError,
    ConfigParsingError,
    ConfigValidationError,
    DefinitionError,
    ReferenceNotFoundError,
    SubnetDefinitionError,
)


class TestConfigLoading:
    """Tests for basic loading and validation success/failure."""

    def test_load_valid_config_successfully(self, create_config_file, cluster_data):
        """Should load a well-formed spec without raising exceptions."""
        config = Config(str(create_config_file(cluster_data)))
        assert config.name == 'prod.example.com'
        assert len(config.cluster.subnets) == 4
        assert config.cluster.api.load_balancer.type == 'Public'
        assert [ig.role for ig in config.instance_groups] == [
            InstanceGroupRole.MASTER, InstanceGroupRole.MASTER, InstanceGroupRole.NODE,
        ]

    def test_missing_name_raises_error(self, create_config_file, cluster_data):
        del cluster_data['name']
        with pytest.raises(ConfigValidationError, match="name\n  Field required"):
            Config(str(create_config_file(cluster_data)))

    def test_file_not_found_raises_error(self, tmp_path):
        with pytest.raises(ConfigFileMissingError):
            Config(str(tmp_path / "missing.yml"))

    def test_invalid_yaml_raises_error(self, tmp_path):
        config_file = tmp_path / "invalid.yml"
        config_file.write_text("key: value: another")
        with pytest.raises(ConfigParsingError, match="Error parsing YAML file"):
            Config(str(config_file))

    def test_non_mapping_document_raises_error(self, tmp_path):
        config_file = tmp_path / "list.yml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigParsingError, match="containing a dictionary"):
            Config(str(config_file))


class TestClusterSpecValidation:
    """Structural and cross-reference checks on the cluster specification."""

    def test_types_are_not_checked_by_schema(self, cluster_data):
        """Unknown load balancer and subnet types are left for the builder to reject."""
        cluster_data['api']['load_balancer']['type'] = 'Sideways'
        cluster_data['subnets'][0]['type'] = 'Mystery'
        spec = ClusterSpec.model_validate(cluster_data)
        assert spec.api.load_balancer.type == 'Sideways'

    def test_negative_idle_timeout_rejected(self, create_config_file, cluster_data):
        cluster_data['api']['load_balancer']['idle_timeout_seconds'] = -1
        with pytest.raises(ConfigValidationError, match="idle_timeout_seconds"):
            Config(str(create_config_file(cluster_data)))

    def test_unknown_load_balancer_key_rejected(self, create_config_file, cluster_data):
        cluster_data['api']['load_balancer']['idle_timeout'] = 30
        with pytest.raises(ConfigValidationError):
            Config(str(create_config_file(cluster_data)))

    def test_invalid_api_access_cidr(self, create_config_file, cluster_data):
        cluster_data['kubernetes_api_access'] = ['10.0.0.0/8', 'not-a-cidr']
        with pytest.raises(ConfigValidationError, match="'not-a-cidr' in kubernetes_api_access"):
            Config(str(create_config_file(cluster_data)))

    def test_api_access_text_kept_verbatim(self, cluster_data):
        cluster_data['kubernetes_api_access'] = ['10.0.0.1/8']
        spec = ClusterSpec.model_validate(cluster_data)
        assert spec.kubernetes_api_access == ['10.0.0.1/8']

    def test_duplicate_subnet_name(self, cluster_data):
        invalid = copy.deepcopy(cluster_data)
        invalid['subnets'].append({'name': 'us-east-1a', 'zone': 'us-east-1c', 'type': 'Private'})
        with pytest.raises(SubnetDefinitionError, match="Duplicate subnet name found: us-east-1a"):
            ClusterSpec.model_validate(invalid)

    def test_duplicate_instance_group_name(self, cluster_data):
        cluster_data['instance_groups'].append({'name': 'nodes', 'role': 'Node'})
        with pytest.raises(DefinitionError, match="Duplicate instance group name found: nodes"):
            ClusterSpec.model_validate(cluster_data)

    def test_instance_group_undefined_subnet(self, cluster_data):
        cluster_data['instance_groups'][0]['subnets'] = ['nowhere']
        with pytest.raises(ReferenceNotFoundError, match="'master-us-east-1a' references an undefined subnet: 'nowhere'"):
            ClusterSpec.model_validate(cluster_data)

    def test_unknown_role_rejected(self, create_config_file, cluster_data):
        cluster_data['instance_groups'][0]['role'] = 'Bastion'
        with pytest.raises(ConfigValidationError):
            Config(str(create_config_file(cluster_data)))

    def test_size_bounds(self, cluster_data):
        cluster_data['instance_groups'][2].update({'min_size': 5, 'max_size': 2})
        with pytest.raises(DefinitionError, match="max_size 2 below min_size 5"):
            ClusterSpec.model_validate(cluster_data)
