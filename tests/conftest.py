import copy

import pytest
import yaml
from pathlib import Path

from infrabuilder.config import ClusterSpec

BASE_CLUSTER = {
    'name': 'prod.example.com',
    'network_cidr': '172.20.0.0/16',
    'api': {
        'load_balancer': {'type': 'Public'},
    },
    'subnets': [
        {'name': 'us-east-1a', 'zone': 'us-east-1a', 'type': 'Private', 'cidr': '172.20.32.0/19'},
        {'name': 'utility-us-east-1a', 'zone': 'us-east-1a', 'type': 'Utility', 'cidr': '172.20.0.0/22'},
        {'name': 'us-east-1b', 'zone': 'us-east-1b', 'type': 'Private', 'cidr': '172.20.64.0/19'},
        {'name': 'utility-us-east-1b', 'zone': 'us-east-1b', 'type': 'Utility', 'cidr': '172.20.4.0/22'},
    ],
    'kubernetes_api_access': ['0.0.0.0/0'],
    'instance_groups': [
        {'name': 'master-us-east-1a', 'role': 'Master', 'subnets': ['us-east-1a']},
        {'name': 'master-us-east-1b', 'role': 'Master', 'subnets': ['us-east-1b']},
        {'name': 'nodes', 'role': 'Node', 'subnets': ['us-east-1a', 'us-east-1b'], 'min_size': 2, 'max_size': 4},
    ],
}


@pytest.fixture
def cluster_data():
    """A fresh, mutable copy of the base cluster specification."""
    return copy.deepcopy(BASE_CLUSTER)


@pytest.fixture
def make_cluster():
    """Build a ClusterSpec from a dict."""
    def _make(data: dict) -> ClusterSpec:
        return ClusterSpec.model_validate(data)
    return _make


@pytest.fixture
def create_config_file(tmp_path: Path):
    """A pytest fixture to create a temporary cluster.yml file."""
    def _create_file(config_data: dict) -> Path:
        config_file = tmp_path / "cluster.yml"
        with open(config_file, 'w') as f:
            yaml.dump(config_data, f)
        return config_file
    return _create_file
