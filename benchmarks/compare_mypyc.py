#!/usr/bin/env python3
"""
Benchmark comparison between pure Python and mypyc-compiled versions of prettyxml.

This script measures:
- Attribute and element escaping
- Serialization of a wide, shallow document
- Serialization of a deep, namespace-heavy document
"""

import argparse
import importlib
import sys
import time
from pathlib import Path

from prettyxml import Document, Element, Namespace, XMLOutputter
from prettyxml.escape import escape_attribute_entities, escape_element_entities

ESCAPE_SAMPLE = 'Tom & "Jerry" <cartoon> it\'s plain text mostly, with a few & marks. ' * 40


def build_wide_document(rows=500):
    root = Element("catalog")
    for index in range(rows):
        item = Element("item").set_attribute("id", str(index)).set_attribute("note", "a < b & 'c'")
        item.add_content(f"Item {index} & friends")
        root.add_content(item)
    return Document(root)


def build_deep_document(depth=200):
    root = Element("root", Namespace("r", "urn:root"))
    current = root
    for level in range(depth):
        child = Element("node", Namespace(f"n{level % 7}", f"urn:n{level % 7}"))
        child.set_attribute("level", str(level))
        child.add_content("text ")
        current.add_content(child)
        current = child
    return Document(root)


def check_compiled_modules():
    """Check which modules are compiled with mypyc."""
    compiled = []
    for name in ("prettyxml.escape", "prettyxml.serialize"):
        module = importlib.import_module(name)
        if getattr(module, "__file__", "").endswith((".so", ".pyd")):
            compiled.append(name.rsplit(".", 1)[1])
    return compiled


def benchmark_escaping(iterations=20000):
    start = time.perf_counter()
    for _ in range(iterations):
        escape_attribute_entities(ESCAPE_SAMPLE)
        escape_element_entities(ESCAPE_SAMPLE)
    return time.perf_counter() - start


def benchmark_serialization(document, iterations=200):
    outputter = XMLOutputter()
    start = time.perf_counter()
    for _ in range(iterations):
        outputter.output_string(document)
    return time.perf_counter() - start


def run_benchmarks():
    print("=" * 70)
    print("prettyxml mypyc Benchmark Comparison")
    print("=" * 70)

    compiled_modules = check_compiled_modules()
    if compiled_modules:
        print(f"\n✓ Compiled modules detected: {', '.join(compiled_modules)}")
    else:
        print("\n✗ No compiled modules detected (running pure Python)")

    print("\n" + "-" * 70)
    print("Benchmark 1: Escaping")
    print("-" * 70)
    time_escape = benchmark_escaping()
    print(f"Time: {time_escape:.4f}s for 20,000 iterations")

    print("\n" + "-" * 70)
    print("Benchmark 2: Wide document")
    print("-" * 70)
    time_wide = benchmark_serialization(build_wide_document())
    print(f"Time: {time_wide:.4f}s for 200 iterations")
    print(f"Rate: {200 / time_wide:.2f} documents/second")

    print("\n" + "-" * 70)
    print("Benchmark 3: Deep namespaced document")
    print("-" * 70)
    time_deep = benchmark_serialization(build_deep_document())
    print(f"Time: {time_deep:.4f}s for 200 iterations")
    print(f"Rate: {200 / time_deep:.2f} documents/second")

    print("\n" + "=" * 70)

    return {
        "escape": time_escape,
        "wide": time_wide,
        "deep": time_deep,
    }


def main():
    parser = argparse.ArgumentParser(description="Compare performance of pure Python vs mypyc-compiled prettyxml")
    parser.add_argument(
        "--mode",
        choices=["pure", "compiled"],
        default="compiled",
        help="Which version to benchmark (default: compiled)",
    )
    args = parser.parse_args()

    if args.mode == "pure":
        import prettyxml

        package_path = Path(prettyxml.__file__).parent
        so_files = list(package_path.glob("*.so"))
        if so_files:
            print(f"\nWarning: Found {len(so_files)} compiled modules.")
            print("To run pure Python benchmarks, first build without mypyc:")
            print("  1. Remove .so files: find src -name '*.so' -delete")
            print("  2. Reinstall: pip install -e .")
            sys.exit(1)
    else:
        print("\nTo build with mypyc:")
        print("  PRETTYXML_USE_MYPYC=1 pip install -e .[mypyc] --no-build-isolation")
        print()

    run_benchmarks()


if __name__ == "__main__":
    main()
