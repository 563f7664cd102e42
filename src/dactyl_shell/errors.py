class ConfigurationError(ValueError):
    """
    The shape parameters describe geometry that cannot be built.

    Raised at generation time; the message names the component that failed.
    """
