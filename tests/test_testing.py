#!/usr/bin/env python3
"""
Unit tests for the test harness helpers.
"""

import unittest

from modinject import ModuleRegistry, module
from modinject.testing import ModuleHarness


class FakeClock:
    def now(self) -> int:
        return 0


class RealClock:
    def now(self) -> int:
        return 1_700_000_000


class TestModuleHarness(unittest.TestCase):
    """Test building injectors for single tests."""

    def setUp(self):
        module("app", []).service("clock", RealClock).run(["clock", self._record_run])
        self.runs = []

    def _record_run(self, clock):
        self.runs.append(clock)

    def test_get_without_run_blocks(self):
        """Test that instances are available while application run blocks are skipped."""
        harness = ModuleHarness("app")

        self.assertIsInstance(harness.get("clock"), RealClock)
        self.assertEqual(self.runs, [])

    def test_run_blocks_opt_in(self):
        harness = ModuleHarness("app", run_blocks=True)
        harness.get("clock")
        self.assertEqual(len(self.runs), 1)

    def test_inline_module_overrides_provider(self):
        """Test registering an anonymous config block for one test."""
        harness = ModuleHarness("app")
        harness.module(["$provide", lambda provide: provide.service("clock", FakeClock)])

        self.assertEqual(harness.get("clock").now(), 0)

    def test_inject(self):
        harness = ModuleHarness("app")
        self.assertEqual(harness.inject(["clock", lambda clock: clock.now()]), 1_700_000_000)

    def test_get_provider(self):
        """Test requesting provider-scope names directly."""
        module("settings", []).constant("TIMEOUT", 5)
        harness = ModuleHarness("app", "settings")

        self.assertEqual(harness.get_provider("TIMEOUT"), 5)
        self.assertTrue(hasattr(harness.get_provider("clockProvider"), "get"))

    def test_modules_fixed_after_injector_created(self):
        harness = ModuleHarness("app")
        harness.get("clock")

        with self.assertRaises(RuntimeError):
            harness.module("other")

    def test_injector_is_reused(self):
        harness = ModuleHarness("app")
        self.assertIs(harness.injector, harness.injector)
        self.assertIs(harness.get("clock"), harness.get("clock"))

    def test_explicit_registry(self):
        registry = ModuleRegistry()
        module("private", [], registry=registry).value("secret", "s3cret")

        harness = ModuleHarness("private", registry=registry)

        self.assertEqual(harness.get("secret"), "s3cret")


if __name__ == "__main__":
    unittest.main()
