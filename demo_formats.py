#!/usr/bin/env python3
"""
Demo: Serialize the example document in every format and verbosity.

Also shows a COMPACT JSON round trip into a second store.
"""

import logging

from spdxstore import Format, MultiFormatStore, StoreConfig, Verbosity
from spdxstore.examples import build_example_document


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    store = MultiFormatStore()
    namespace = build_example_document(store.store)

    print("=" * 80)
    print("MULTI-FORMAT DEMO")
    print("=" * 80)

    for fmt in Format:
        for verbosity in Verbosity:
            store.set_config(StoreConfig(fmt, verbosity))
            print(f"\n{fmt.value} / {verbosity.value}:")
            print("-" * 80)
            print(store.dumps(namespace).decode("utf-8"))

    # Round trip through compact JSON
    store.set_config(StoreConfig(Format.JSON, Verbosity.COMPACT))
    data = store.dumps(namespace)
    other = MultiFormatStore(StoreConfig(Format.JSON, Verbosity.COMPACT))
    restored = other.loads(data)
    print("\n" + "=" * 80)
    print(f"Restored {restored}: {sorted(other.store.items(restored))}")
    print("=" * 80)


if __name__ == "__main__":
    main()
