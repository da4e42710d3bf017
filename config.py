import json
from pathlib import Path

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"


class GeneratorConfig:
    __slots__ = ("time_length", "time_offset", "expiry_warning_days")

    def __init__(self, time_length=45, time_offset=0, expiry_warning_days=365):
        self.time_length = time_length
        self.time_offset = time_offset
        self.expiry_warning_days = expiry_warning_days

    @property
    def expiry_warning_ms(self):
        return int(self.expiry_warning_days * 86_400_000)


class ServerConfig:
    __slots__ = ("host", "port")

    def __init__(self, host="127.0.0.1", port=8080):
        self.host = host
        self.port = port


class ServiceConfig:
    __slots__ = ("max_batch", "username", "password")

    def __init__(self, max_batch=1000, username="floatid", password=None):
        self.max_batch = max_batch
        self.username = username
        self.password = password


class LoggingConfig:
    __slots__ = ("level", "crash_file")

    def __init__(self, level="INFO", crash_file="logs/crash.log"):
        self.level = level
        self.crash_file = crash_file


class Config:
    __slots__ = ("generator", "server", "service", "logging")

    def __init__(self, generator=None, server=None, service=None, logging=None):
        self.generator = generator or GeneratorConfig()
        self.server = server or ServerConfig()
        self.service = service or ServiceConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            GeneratorConfig(**d.get("generator", {})),
            ServerConfig(**d.get("server", {})),
            ServiceConfig(**d.get("service", {})),
            LoggingConfig(**d.get("logging", {})),
        )


def load_config(path=None):
    config_path = Path(path) if path else _DEFAULT_CONFIG

    if not config_path.exists():
        return Config()

    with open(config_path) as file:
        return Config.from_dict(json.load(file))
