import logging
import os
from collections import namedtuple
from collections.abc import Mapping
from pathlib import Path

import host_identity
import prebuild_name
from binding_errors import BindingNotFoundError, InvalidArgumentError, UnsupportedModeError

log = logging.getLogger(__name__)

EnvironmentIdentity = namedtuple("EnvironmentIdentity", ["arch", "platform", "libc", "runtime"])

_NO_OVERRIDE = host_identity.EnvironmentOverride()
_PLAIN_HOST = host_identity.HostDetector()


def _check_arguments(base_path, descriptor):
    if not isinstance(base_path, (str, os.PathLike)):
        raise InvalidArgumentError("Invalid basePath for native binding")
    path = os.fspath(base_path)
    if not isinstance(path, str) or not path:
        raise InvalidArgumentError("Invalid basePath for native binding")
    if not isinstance(descriptor, Mapping):
        raise InvalidArgumentError("Invalid options for native binding")
    name = descriptor.get("name")
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError("Invalid name for native binding")


def _napi_versions(descriptor):
    versions = descriptor.get("napi_versions")
    if not versions or isinstance(versions, (str, bytes)):
        return None
    try:
        return list(versions)
    except TypeError:
        return None


def environment_identity(verify_mode=False, napi_mode=True, override=None, host_detector=None):
    """Work out the (arch, platform, libc, runtime) tuple to look for.

    Overrides only count in verify mode; node-API builds are shared by every
    runtime, so the runtime stays "node" for them.
    """
    override = override or _NO_OVERRIDE
    host_detector = host_detector or _PLAIN_HOST

    arch = (verify_mode and override.arch) or host_identity.native_arch()
    platform = (verify_mode and override.platform) or host_identity.native_platform()

    runtime = host_identity.RUNTIME_NODE
    if not napi_mode:
        if verify_mode and override.runtime:
            runtime = override.runtime
        elif host_detector.is_desktop_host():
            runtime = host_identity.RUNTIME_DESKTOP
        elif host_detector.is_game_engine_host():
            runtime = host_identity.RUNTIME_GAME_ENGINE

    libc = "musl" if prebuild_name.is_musl_platform(platform) else None
    return EnvironmentIdentity(arch, platform, libc, runtime)


def candidate_paths(base_path, descriptor, verify_mode=False, override=None, host_detector=None):
    _check_arguments(base_path, descriptor)
    versions = _napi_versions(descriptor)
    if versions is None:
        raise UnsupportedModeError("legacy native-binding naming is not supported")

    name = descriptor["name"]
    base = Path(base_path)
    identity = environment_identity(verify_mode, True, override, host_detector)
    log.debug("Looking for %s as %s", name, identity)

    candidates = []
    if not verify_mode:
        # in-tree builds win over anything prebuilt
        candidates.append(base / "build" / "Debug" / f"{name}.node")
        candidates.append(base / "build" / "Release" / f"{name}.node")

    for version in versions:
        filename = prebuild_name.format_prebuild_name(
            name=name,
            platform=identity.platform,
            arch=identity.arch,
            libc=identity.libc,
            napi_version=version,
            runtime=identity.runtime,
        )
        candidates.append(base / "prebuilds" / filename)

    return [str(c) for c in candidates]


def _is_regular_file(candidate):
    return os.path.isfile(candidate)


def resolve(base_path, descriptor, verify_mode=False, throw_on_missing=False, override=None, host_detector=None):
    candidates = candidate_paths(base_path, descriptor, verify_mode, override, host_detector)

    for candidate in candidates:
        log.debug("Probing %s", candidate)
        if _is_regular_file(candidate):
            log.info("Using native binding %s", candidate)
            return candidate

    if throw_on_missing:
        raise BindingNotFoundError(descriptor["name"], candidates)
    return None
