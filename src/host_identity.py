import os
import platform
import sys
from dataclasses import dataclass
from typing import Optional


RUNTIME_NODE = "node"
RUNTIME_DESKTOP = "electron"
RUNTIME_GAME_ENGINE = "node-webkit"

ENV_ARCH = "npm_config_arch"
ENV_PLATFORM = "npm_config_platform"
ENV_RUNTIME = "npm_config_runtime"

_ARCH_MAP = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv8l": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
    "arm": "arm",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "ppc64le": "ppc64",
    "ppc64": "ppc64",
    "s390x": "s390x",
}

_PLATFORM_PREFIXES = (
    ("linux", "linux"),
    ("darwin", "darwin"),
    ("win32", "win32"),
    ("cygwin", "win32"),
    ("freebsd", "freebsd"),
    ("openbsd", "openbsd"),
    ("sunos", "sunos"),
    ("aix", "aix"),
)


def native_arch():
    machine = platform.machine().lower()
    return _ARCH_MAP.get(machine, machine)


def native_platform():
    for prefix, name in _PLATFORM_PREFIXES:
        if sys.platform.startswith(prefix):
            return name
    return sys.platform


class HostDetector:
    """Answers which embedding host, if any, the process runs inside.

    The base detector reports a plain runtime.
    """

    def is_desktop_host(self):
        return False

    def is_game_engine_host(self):
        return False


class EnvironHostDetector(HostDetector):
    def __init__(self, environ=None):
        self._environ = os.environ if environ is None else environ

    def is_desktop_host(self):
        return bool(self._environ.get("ELECTRON_RUN_AS_NODE") or self._environ.get("ELECTRON_VERSION"))

    def is_game_engine_host(self):
        return bool(self._environ.get("NW_VERSION"))


@dataclass(frozen=True)
class EnvironmentOverride:
    arch: Optional[str] = None
    platform: Optional[str] = None
    runtime: Optional[str] = None

    @classmethod
    def from_environ(cls, environ=None):
        environ = os.environ if environ is None else environ
        # npm leaves empty strings behind for unset config keys
        return cls(
            arch=environ.get(ENV_ARCH) or None,
            platform=environ.get(ENV_PLATFORM) or None,
            runtime=environ.get(ENV_RUNTIME) or None,
        )

    def merged(self, arch=None, platform=None, runtime=None):
        return EnvironmentOverride(
            arch=arch or self.arch,
            platform=platform or self.platform,
            runtime=runtime or self.runtime,
        )
