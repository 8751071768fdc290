#!/usr/bin/env python3
"""
Capture and restore example for expandstate.

This example demonstrates:
- Building an in-memory solution tree
- Capturing which nodes are expanded
- Letting an operation expand everything, then folding it back
- Checking restore consent before the operation runs
"""

import logging
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from expandstate import (
    InMemorySettings,
    OwnerThreadDispatcher,
    RestoreConsent,
    preserve_expansion_state,
)
from expandstate.testing import ExpansionStateHelper, build_host


def show(helper, title):
    print(f"\n{title}:")
    for name in sorted(helper.expanded_names()):
        print(f"  + {name}")


def main():
    """Expand a whole solution during a fake restore and put it back."""
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.WARNING)

    consent = RestoreConsent(InMemorySettings({"packageRestore": {"enabled": "true"}}))
    if not consent.is_granted:
        print("Package restore is not allowed; nothing to do.")
        return

    with OwnerThreadDispatcher(name="ui-thread") as dispatcher:
        host = build_host({
            "WebApp": ("WebApp", [
                ("Controllers", ["HomeController.cs"], {"expanded": True}),
                ("Views", [("Home", ["Index.cshtml"])]),
                ("References", ["System", "Newtonsoft.Json"]),
            ], {"expanded": True}),
            "WebApp.Tests": ("WebApp.Tests", [("Unit", ["HomeTests.cs"])]),
        }, dispatcher=dispatcher)
        helper = ExpansionStateHelper(host)

        show(helper, "Before restore")

        with preserve_expansion_state(host) as snapshot:
            # Restoring packages touches every project and expands them
            helper.expand_everything()
            show(helper, "During restore")

        show(helper, "After restore")
        print(f"\nSnapshot held {snapshot.total_expanded()} expanded nodes "
              f"across {len(snapshot)} projects")


if __name__ == "__main__":
    print("expandstate - Capture and Restore Example")
    print("=" * 50)
    main()
