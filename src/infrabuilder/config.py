import ipaddress
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .constants import InstanceGroupRole
from .exceptions import (
    ConfigFileMissingError,
    ConfigParsingError,
    ConfigValidationError,
    DefinitionError,
    ReferenceNotFoundError,
    SubnetDefinitionError,
)


logger = logging.getLogger(__name__)


class LoadBalancerSpec(BaseModel):
    """
        Class Spec-Validation Model describe `api.load_balancer`

        `type` is kept as free text; the load balancer builder decides
        which values it can handle.
    """
    type: str
    idle_timeout_seconds: Optional[int] = Field(None, ge=0)
    model_config = ConfigDict(extra="forbid")


class DNSAccessSpec(BaseModel):
    """
        Class Spec-Validation Model describe `api.dns` (API reached through DNS only)
    """
    model_config = ConfigDict(extra="allow")


class ApiSpec(BaseModel):
    """
        Class Spec-Validation Model describe `api`
    """
    load_balancer: Optional[LoadBalancerSpec] = None
    dns: Optional[DNSAccessSpec] = None


class SubnetSpec(BaseModel):
    """
        Class Spec-Validation Model describe one entry of `subnets`
    """
    name: str
    zone: str
    type: str
    cidr: Optional[str] = None


class InstanceGroupSpec(BaseModel):
    """
        Class Spec-Validation Model describe one entry of `instance_groups`
    """
    name: str
    role: InstanceGroupRole = InstanceGroupRole.NODE
    subnets: List[str] = Field(default_factory=list)
    min_size: int = Field(1, ge=0)
    max_size: int = Field(1, ge=0)

    @model_validator(mode='after')
    def check_size_bounds(self) -> 'InstanceGroupSpec':
        if self.max_size < self.min_size:
            raise DefinitionError(
                f"Instance group '{self.name}' has max_size {self.max_size} below min_size {self.min_size}."
            )
        return self

    @property
    def is_master(self) -> bool:
        return self.role == InstanceGroupRole.MASTER


class ClusterSpec(BaseModel):
    """
        Class Spec-Validation Model describe top-level of a cluster specification
    """
    name: str
    network_cidr: Optional[str] = None
    api: Optional[ApiSpec] = None
    subnets: List[SubnetSpec] = Field(default_factory=list)
    kubernetes_api_access: List[str] = Field(default_factory=list)
    instance_groups: List[InstanceGroupSpec] = Field(default_factory=list)
    model_config = ConfigDict(extra="allow")

    @field_validator('kubernetes_api_access')
    @classmethod
    def check_api_access_cidrs(cls, value: List[str]) -> List[str]:
        """Each entry must be a network; the text itself is kept verbatim"""
        for cidr in value:
            try:
                ipaddress.ip_network(cidr, strict=False)
            except ValueError:
                raise ValueError(f"'{cidr}' in kubernetes_api_access is not a valid CIDR")
        return value

    @model_validator(mode='after')
    def validate_unique_names(self) -> 'ClusterSpec':
        """Subnet and instance group names identify them, so they must be unique"""
        seen = set()
        for subnet in self.subnets:
            if subnet.name in seen:
                raise SubnetDefinitionError(f"Duplicate subnet name found: {subnet.name}")
            seen.add(subnet.name)

        seen.clear()
        for ig in self.instance_groups:
            if ig.name in seen:
                raise DefinitionError(f"Duplicate instance group name found: {ig.name}")
            seen.add(ig.name)
        return self

    @model_validator(mode='after')
    def validate_instance_group_subnets(self) -> 'ClusterSpec':
        """Check every subnet an instance group spans is defined"""
        defined = {subnet.name for subnet in self.subnets}
        for ig in self.instance_groups:
            for subnet_name in ig.subnets:
                logger.debug(f"[Validation] Instance group '{ig.name}' spans subnet '{subnet_name}'.")
                if subnet_name not in defined:
                    raise ReferenceNotFoundError(
                        f"Instance group '{ig.name}' references an undefined subnet: '{subnet_name}'."
                    )
        return self


class Config:
    """
    Loads and validates a cluster specification YAML file using Pydantic models.
    It is the sole gatekeeper for configuration.
    """
    def __init__(self, config_path: str):
        self.path = config_path
        logger.info(f"Loading cluster specification from '{self.path}'...")
        raw_data = self._load_raw_config()

        logger.info("Validating cluster specification structure with Pydantic...")
        try:
            self.model = ClusterSpec.model_validate(raw_data)
        except ValidationError as e:
            raise ConfigValidationError(f"Cluster specification validation failed:\n{e}")
        logger.debug(f"Cluster specification validated successfully: \n{self.model.model_dump_json(indent=2)}")
        logger.info("Cluster specification validation passed.")

    def _load_raw_config(self) -> Dict[str, Any]:
        try:
            content = Path(self.path).read_text(encoding='utf-8')
        except FileNotFoundError:
            raise ConfigFileMissingError(f"Cluster specification not found at: {self.path}")
        try:
            config_data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigParsingError(f"Error parsing YAML file: {e}")
        if not isinstance(config_data, dict):
            raise ConfigParsingError("Cluster specification must be a YAML document containing a dictionary.")
        logger.debug(f"Successfully parsed YAML from '{self.path}'.")
        return config_data

    @property
    def name(self) -> str:
        return self.model.name

    @property
    def cluster(self) -> ClusterSpec:
        return self.model

    @property
    def instance_groups(self) -> List[InstanceGroupSpec]:
        return self.model.instance_groups
