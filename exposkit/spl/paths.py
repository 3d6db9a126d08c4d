"""Path helpers for SPL input and output files."""

import os


def expand_path(path, env=None) -> str:
    """Replace a leading ``$NAME`` component with the variable's value.

    The first character of the first component is dropped to form the
    variable name; when the variable is unset the component is kept.
    """
    env = os.environ if env is None else env
    token, sep, rest = path.partition("/")
    value = env.get(token[1:])
    head = value if value is not None else token
    return f"{head}/{rest}" if sep else head


def remove_extension(path) -> str:
    """Drop everything after the last dot, keeping the dot."""
    return path[: path.rfind(".") + 1]


def output_filename(path) -> str:
    """Name of the compiled file: the extension replaced by ``xsm``."""
    return remove_extension(path) + "xsm"