""" esoperator exceptions. """


class ESOperatorException(Exception):
    """ Base exception for esoperator. """
    pass


class KubeAccessError(ESOperatorException):
    """ Raised when the Kubernetes API is used before a connection was established. """
    pass


class ClaimProvisioningError(ESOperatorException):
    """ Raised when a PersistentVolumeClaim could not be created or updated. """
    pass


class StorageConfigurationError(ESOperatorException):
    """ Raised in strict mode when a node has no storage variant configured. """
    pass
