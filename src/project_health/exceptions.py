class ProjectHealthError(Exception):
    """Base exception for project health analytics errors."""
    pass

class ConfigError(ProjectHealthError):
    """Settings file that cannot be read or does not validate."""
    pass

class DataSourceError(ProjectHealthError):
    """Snapshot input that cannot be used at all."""
    pass
