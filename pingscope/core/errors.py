class PingscopeError(Exception):
    pass


class ConfigurationError(PingscopeError):
    """Raised when a configuration value is outside its valid range."""

    pass


class ProbeSetupError(PingscopeError):
    """Raised when the probe engine cannot resolve a target or open a socket."""

    pass
