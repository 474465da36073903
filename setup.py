"""
Build script for prettyxml with optional mypyc compilation.

Usage:
    # Pure Python build (default)
    python -m build

    # Compiled with mypyc
    PRETTYXML_USE_MYPYC=1 pip install .
"""

import os
import sys
from pathlib import Path

from setuptools import setup

USE_MYPYC = os.environ.get("PRETTYXML_USE_MYPYC", "0") == "1"

# Only the escaping functions are compiled: they run once per text node and
# attribute value and hold no classes.
# Note: serialize.py is excluded because XMLOutputter and NamespaceStack are
# meant to be subclassed (print_* hooks, namespace_stack_factory), and
# interpreted classes cannot inherit from compiled ones
# Note: node.py is excluded for the same reason; callers extend the tree classes
MYPYC_MODULES = [
    "src/prettyxml/escape.py",
]


def build_with_mypyc() -> list:
    """Build extension modules using mypyc."""
    try:
        from mypyc.build import mypycify
    except ImportError:
        print(
            "ERROR: mypyc is not installed. Install with: pip install mypy",
            file=sys.stderr,
        )
        print("Or install with mypyc support: pip install prettyxml[mypyc]", file=sys.stderr)
        sys.exit(1)

    for module_path in MYPYC_MODULES:
        if not Path(module_path).exists():
            print(f"ERROR: Module not found: {module_path}", file=sys.stderr)
            sys.exit(1)

    print("=" * 70)
    print("Building prettyxml with mypyc compilation")
    print("=" * 70)
    print(f"Compiling {len(MYPYC_MODULES)} modules:")
    for module in MYPYC_MODULES:
        print(f"  - {module}")
    print("=" * 70)

    opt_level = os.environ.get("MYPYC_OPT_LEVEL", "3")
    debug_level = os.environ.get("MYPYC_DEBUG_LEVEL", "0")

    mypyc_options = {
        "opt_level": opt_level,
        "debug_level": debug_level,
        "verbose": True,
        "separate": False,
        "multi_file": False,
    }

    return mypycify(MYPYC_MODULES, **mypyc_options)


if __name__ == "__main__":
    ext_modules = []

    if USE_MYPYC:
        ext_modules = build_with_mypyc()
    else:
        print("Building prettyxml in pure Python mode (no mypyc compilation)")
        print("To enable mypyc: PRETTYXML_USE_MYPYC=1 pip install .")

    setup(
        ext_modules=ext_modules,
    )
