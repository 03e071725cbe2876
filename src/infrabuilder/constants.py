from datetime import timedelta
from enum import Enum

# --- Log and Debug ---
# Short aliases for module names to keep CLI/env concise
LOG_ALIAS_MAP = {
    "lb": "infrabuilder.model.api_loadbalancer",
    "api": "infrabuilder.model.api_loadbalancer",
    "subnet": "infrabuilder.model.subnets",
    "sn": "infrabuilder.model.subnets",
    "net": "infrabuilder.model.network",
    "fw": "infrabuilder.model.firewall",
    "asg": "infrabuilder.model.autoscaling",
    "build": "infrabuilder.model.build",
    "bld": "infrabuilder.model.build",
    "ctx": "infrabuilder.context",
    "conf": "infrabuilder.config",
    "tasks": "infrabuilder.tasks",
}

# Top-level modules within infrabuilder for auto-prefixing
KNOWN_TOP_MODULES = {
    "model",
    "tasks",
    "utils",
    "config",
    "context",
    "exceptions",
    "cli",
}

LOG_LEVELS_ENV = "INFRAB_LOG_LEVELS"


# --- Known values in the cluster specification ---
class LoadBalancerType(str, Enum):
    PUBLIC = "Public"
    INTERNAL = "Internal"


class SubnetType(str, Enum):
    PUBLIC = "Public"
    PRIVATE = "Private"
    UTILITY = "Utility"


class InstanceGroupRole(str, Enum):
    MASTER = "Master"
    NODE = "Node"


# Subnet types a load balancer of the given type may be placed in
LOAD_BALANCER_SUBNET_TYPES = {
    LoadBalancerType.PUBLIC: {SubnetType.PUBLIC, SubnetType.UTILITY},
    LoadBalancerType.INTERNAL: {SubnetType.PRIVATE},
}

# --- API load balancer ---
API_PREFIX = "api"
HTTPS_PORT = 443
LOAD_BALANCER_DEFAULT_IDLE_TIMEOUT = timedelta(minutes=5)
INTERNAL_SCHEME = "internal"

# Fast-recovery health check for the masters
HEALTH_CHECK_TIMEOUT = 5
HEALTH_CHECK_INTERVAL = 10
HEALTH_CHECK_HEALTHY_THRESHOLD = 2
HEALTH_CHECK_UNHEALTHY_THRESHOLD = 2

ANY_IPV4 = "0.0.0.0/0"

# Provider limit on load balancer names
ELB_NAME_MAX_LENGTH = 32
ELB_NAME_HASH_LENGTH = 6

# --- Output ---
OUTPUT_FORMATS = ("yaml", "json")
