from .config import AuditConfig, Config, FetcherConfig, MonitoringConfig, find_config_file, load_config, settings

__all__ = [
    "AuditConfig",
    "Config",
    "FetcherConfig",
    "MonitoringConfig",
    "find_config_file",
    "load_config",
    "settings",
]
