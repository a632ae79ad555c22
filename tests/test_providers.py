#!/usr/bin/env python3
"""
Unit tests for provider recipes.
"""

import unittest
from dataclasses import dataclass

from modinject import (
    InjectionScopeError,
    InvalidRecipeError,
    ProviderEntry,
    RecipeKind,
    UnknownDependencyError,
    create_injector,
    inject,
    module,
)


@dataclass
class Settings:
    url: str
    retries: int = 3


@inject("settings")
class ApiClient:
    def __init__(self, settings: Settings):
        self.settings = settings


class SettingsProvider:
    """Configurable provider; config blocks adjust it before instances exist."""

    def __init__(self):
        self.url = "http://localhost"

    def set_url(self, url: str) -> None:
        self.url = url

    @inject("RETRIES")
    def get(self, retries: int) -> Settings:
        return Settings(self.url, retries)


class TestRecipes(unittest.TestCase):
    """Test each recipe kind."""

    def test_value(self):
        payload = {"a": 1}
        module("app", []).value("payload", payload)

        self.assertIs(create_injector(["app"]).get("payload"), payload)

    def test_factory(self):
        module("app", []).value("name", "svc").factory(
            "label", ["name", lambda name: name.upper()]
        )

        self.assertEqual(create_injector(["app"]).get("label"), "SVC")

    def test_service(self):
        """Test that services are instantiated with their declared dependencies."""
        module("app", []).value("settings", Settings("http://api")).service("client", ApiClient)

        client = create_injector(["app"]).get("client")

        self.assertIsInstance(client, ApiClient)
        self.assertEqual(client.settings.url, "http://api")

    def test_service_requires_class(self):
        module("app", []).service("client", lambda: None)

        with self.assertRaises(InvalidRecipeError):
            create_injector(["app"])

    def test_constant_visible_in_both_phases(self):
        seen = []
        module("app", []).constant("VERSION", "1.0").config(["VERSION", seen.append])

        injector = create_injector(["app"])

        self.assertEqual(injector.get("VERSION"), "1.0")
        self.assertEqual(seen, ["1.0"])

    def test_provider_class_is_instantiated_at_registration(self):
        """Test that a provider class is built in the provider scope and configurable."""
        module("app", []).constant("RETRIES", 5).provider("settings", SettingsProvider).config(
            ["settingsProvider", lambda p: p.set_url("http://prod")]
        )

        settings = create_injector(["app"]).get("settings")

        self.assertEqual(settings, Settings("http://prod", 5))

    def test_provider_object(self):
        """Test registering an already built provider object."""
        provider = SettingsProvider()
        module("app", []).constant("RETRIES", 1).provider("settings", provider)

        injector = create_injector(["app"])

        self.assertIs(injector.provider_scope.get("settingsProvider"), provider)
        self.assertEqual(injector.get("settings").retries, 1)

    def test_provider_builder_depends_on_other_provider(self):
        """Test that a provider constructor can receive earlier providers and constants."""

        @inject("settingsProvider", "PREFIX")
        class ClientProvider:
            def __init__(self, settings_provider, prefix):
                self.url = prefix + settings_provider.url
                self.get = lambda: self.url

        module("app", []).constant("RETRIES", 0).constant("PREFIX", "proxy+").provider(
            "settings", SettingsProvider
        ).provider("client", ClientProvider)

        self.assertEqual(create_injector(["app"]).get("client"), "proxy+http://localhost")

    def test_provider_builder_function(self):
        """Test a plain function returning a provider object."""

        class Box:
            get = staticmethod(lambda: "boxed")

        module("app", []).provider("box", lambda: Box())

        self.assertEqual(create_injector(["app"]).get("box"), "boxed")

    def test_provider_builder_cannot_use_instances(self):
        module("app", []).value("v", 1).provider("p", ["v", lambda v: SettingsProvider()])

        with self.assertRaises(InjectionScopeError):
            create_injector(["app"])

    def test_provider_without_get(self):
        class NotAProvider:
            pass

        module("app", []).provider("broken", NotAProvider)

        with self.assertRaises(InvalidRecipeError):
            create_injector(["app"])

    def test_later_registration_replaces_earlier(self):
        """Test that a module required later can override a provider."""
        module("core", []).value("mode", "real")
        module("testing", []).value("mode", "fake")
        module("app", ["core", "testing"])

        self.assertEqual(create_injector(["app"]).get("mode"), "fake")

    def test_registry_entries(self):
        captured = {}
        module("app", []).value("v", 1).constant("C", 2).config(
            ["$provide", lambda provide: captured.update(entries=provide.entries())]
        )

        create_injector(["app"])
        entries = captured["entries"]

        self.assertIsInstance(entries["v"], ProviderEntry)
        self.assertIs(entries["v"].kind, RecipeKind.VALUE)
        self.assertIs(entries["C"].kind, RecipeKind.CONSTANT)
        self.assertEqual(entries["C"].payload, 2)


class TestDecorators(unittest.TestCase):
    """Test decorating existing providers."""

    def test_decorator_wraps_instance(self):
        """Test that the decorator receives the original as $delegate."""
        module("app", []).value("greeting", "hello").decorator(
            "greeting", ["$delegate", lambda delegate: delegate + "!"]
        )

        self.assertEqual(create_injector(["app"]).get("greeting"), "hello!")

    def test_decorator_with_dependencies(self):
        module("app", []).value("suffix", "?").factory("greeting", lambda: "hi").decorator(
            "greeting", ["$delegate", "suffix", lambda delegate, suffix: delegate + suffix]
        )

        self.assertEqual(create_injector(["app"]).get("greeting"), "hi?")

    def test_decorators_stack_in_order(self):
        module("base", []).value("word", "a")
        module("one", ["base"]).decorator("word", ["$delegate", lambda d: d + "b"])
        module("two", ["base"]).decorator("word", ["$delegate", lambda d: d + "c"])
        module("app", ["one", "two"])

        self.assertEqual(create_injector(["app"]).get("word"), "abc")

    def test_decorated_instance_is_cached(self):
        calls = []

        def decorate(delegate):
            calls.append(delegate)
            return [delegate]

        module("app", []).value("item", 1).decorator("item", ["$delegate", decorate])
        injector = create_injector(["app"])

        self.assertIs(injector.get("item"), injector.get("item"))
        self.assertEqual(calls, [1])

    def test_decorator_of_unknown_provider(self):
        module("app", []).decorator("ghost", ["$delegate", lambda d: d])

        with self.assertRaises(UnknownDependencyError) as ctx:
            create_injector(["app"])

        self.assertEqual(ctx.exception.name, "ghostProvider")

    def test_shared_provider_object_is_decorated_per_injector(self):
        """Test that decorating a shared provider object does not leak into later injectors."""

        class GreetingProvider:
            def get(self):
                return "hi"

        provider = GreetingProvider()
        original_get = provider.get
        module("app", []).provider("greeting", provider).decorator(
            "greeting", ["$delegate", lambda d: d + "!"]
        )

        self.assertEqual(create_injector(["app"]).get("greeting"), "hi!")
        self.assertEqual(create_injector(["app"]).get("greeting"), "hi!")
        self.assertEqual(provider.get, original_get)

    def test_reregistration_drops_decorator(self):
        module("app", []).value("word", "a").decorator(
            "word", ["$delegate", lambda d: d + "b"]
        ).value("word", "z")

        self.assertEqual(create_injector(["app"]).get("word"), "z")


if __name__ == "__main__":
    unittest.main()
