"""Check that a prebuilt binding exists for the install target.

Installers run this before falling back to a source build. The target comes
from the npm_config_arch / npm_config_platform / npm_config_runtime variables
or the matching command-line flags.

Exit codes: 0 prebuild found, 1 missing, 2 bad options.
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

import vendor_paths
from binding_errors import BindingError, BindingNotFoundError
from host_identity import EnvironHostDetector, EnvironmentOverride

OPTIONS_FILE = "binding-options.json"

log = logging.getLogger(__name__)


def _parse_args(argv):
    parser = argparse.ArgumentParser(prog="verify-prebuild", description=__doc__.splitlines()[0])
    parser.add_argument("--base-path", default=os.getcwd(), help="directory holding build/ and prebuilds/")
    parser.add_argument("--options", help=f"binding options JSON (default: <base-path>/{OPTIONS_FILE})")
    parser.add_argument("--name", help="binding name, overrides the options file")
    parser.add_argument(
        "--napi-version",
        dest="napi_versions",
        action="append",
        type=int,
        help="node-API version to accept, repeatable, in preference order",
    )
    parser.add_argument("--arch")
    parser.add_argument("--platform")
    parser.add_argument("--runtime")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def load_options(path):
    path = Path(path)
    if not path.exists():
        return {}
    options = json.loads(path.read_text())
    if not isinstance(options, dict):
        raise ValueError(f"{path} must hold a JSON object")
    return options


def main(argv=None, environ=None):
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        descriptor = load_options(args.options or Path(args.base_path) / OPTIONS_FILE)
    except (OSError, ValueError) as e:
        print(f"Could not read binding options: {e}", file=sys.stderr)
        return 2

    if args.name:
        descriptor["name"] = args.name
    if args.napi_versions:
        descriptor["napi_versions"] = args.napi_versions

    override = EnvironmentOverride.from_environ(environ).merged(
        arch=args.arch,
        platform=args.platform,
        runtime=args.runtime,
    )
    host_detector = EnvironHostDetector(environ)
    log.debug("Verifying prebuild with %s", override)

    try:
        found = vendor_paths.resolve(
            args.base_path,
            descriptor,
            verify_mode=True,
            throw_on_missing=True,
            override=override,
            host_detector=host_detector,
        )
    except BindingNotFoundError as e:
        print(f"No prebuild found for {e.name}\nTried paths:", file=sys.stderr)
        for candidate in e.candidates:
            print(f" - {candidate}", file=sys.stderr)
        return 1
    except BindingError as e:
        print(str(e), file=sys.stderr)
        return 2

    print(found)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
