import ctypes
import logging

from binding_errors import InternalInvariantError
from vendor_paths import resolve

log = logging.getLogger(__name__)


def load(base_path, descriptor, loader=ctypes.CDLL):
    """Find the binding for ``descriptor`` under ``base_path`` and load it.

    ``loader`` is the dynamic-loading primitive, ``ctypes.CDLL`` unless the
    caller needs another one (``ctypes.PyDLL``, ``cffi.FFI().dlopen``...).
    Whatever it returns is handed back untouched.
    """
    found_path = resolve(base_path, descriptor, verify_mode=False, throw_on_missing=True)

    # resolve() raises when nothing matches, so this only trips if that changes
    if not found_path:
        raise InternalInvariantError(f"Failed to find binding for {descriptor['name']}")

    log.debug("Loading %s", found_path)
    return loader(found_path)
