from pathlib import Path

from binding_errors import UnsupportedModeError

ALPINE_RELEASE = Path("/etc/alpine-release")


def format_prebuild_name(name, platform, arch, libc=None, napi_version=None, runtime="node"):
    """Build the prebuild file name relative to the prebuilds directory.

    ``foo-linux-x64-musl/node-napi-v3.node``; the libc token only applies to linux.
    """
    if not napi_version:
        raise UnsupportedModeError("legacy native-binding naming is not supported")

    tokens = [
        name,
        platform,
        arch,
        libc if platform == "linux" else None,
    ]
    prefix = "-".join(str(t) for t in tokens if t)
    return f"{prefix}/{runtime}-napi-v{napi_version}.node"


def is_musl_platform(platform):
    return platform == "linux" and ALPINE_RELEASE.exists()
