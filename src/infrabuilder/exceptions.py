class InfraBuilderError(Exception):
    """Base exception for all application-specific errors."""

    pass


# --- 1. Errors related to loading and parsing the cluster specification ---
class ConfigurationError(InfraBuilderError):
    """Base class for errors encountered while finding, reading, or parsing cluster specs."""

    pass


class ConfigFileMissingError(ConfigurationError):
    """Raised when the cluster specification file cannot be found."""

    pass


class ConfigParsingError(ConfigurationError):
    """Raised when a YAML cluster specification is syntactically incorrect."""

    pass


class ConfigValidationError(ConfigurationError):
    """Raised when the specification fails structural validation (e.g., Pydantic)."""

    pass


# --- 2. Errors related to the logical validity and definitions within the spec ---
class DefinitionError(InfraBuilderError):
    """Base class for errors in the logical definition and references within the spec."""

    pass


class LoadBalancerDefinitionError(DefinitionError):
    """Raised when the API load balancer requests a type that cannot be handled."""

    pass


class SubnetDefinitionError(DefinitionError):
    """Raised for subnets with an unknown type or a duplicated name."""

    pass


class ReferenceNotFoundError(DefinitionError):
    """Raised when a link or a subnet reference points to something that does not exist."""

    pass


class CircularDependencyError(DefinitionError):
    """Raised when links between tasks form a loop."""

    pass


class DuplicateTaskError(DefinitionError):
    """Raised when two different tasks are added to the collection under one name."""

    pass


# --- 3. Errors that occur while assembling the task graph ---
class BuildError(InfraBuilderError):
    """Base class for errors that occur during a build pass."""

    pass


class SubnetSelectionError(BuildError):
    """Raised when a zone has no subnet to choose from."""

    pass
